"""Utility functions for the API."""

from pathlib import Path
from typing import List

from fastapi import HTTPException

from c_style_checker.errors import SourceReadError

from .schemas import CheckRequest, IssueOut
from .services import CheckerService

checker_svc = CheckerService()


def run_check(req: CheckRequest) -> List[IssueOut]:
    """Run the checker on the request's file_path or code."""
    if req.file_path:
        p = Path(req.file_path)
        if not p.is_absolute():
            raise HTTPException(400, "file_path must be absolute")
        if not p.exists():
            raise HTTPException(404, f"File not found: {req.file_path}")
        try:
            return checker_svc.analyze_file(p, req.style)
        except SourceReadError as e:
            raise HTTPException(400, str(e)) from e
    if req.code is not None:
        return checker_svc.analyze_code(req.code, filename=req.filename or "input.c", style=req.style)
    raise HTTPException(
        400,
        "Provide either code or file_path.",
    )
