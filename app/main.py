"""FastAPI app: /health, /check."""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from c_style_checker import __version__

from .config import get_host, get_port
from .routes import check_router, health_router
from .startup import validate_config

logger = logging.getLogger(__name__)

app = FastAPI(
    title="C Style Checker API",
    description="K&R / Allman style checks for C sources.",
    version=__version__,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(check_router)


@app.on_event("startup")
def _validate_config() -> None:
    """Validate config at startup."""
    validate_config()


def run() -> None:
    """Serve the API with uvicorn on HOST:PORT."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=get_host(), port=get_port())


if __name__ == "__main__":
    run()
