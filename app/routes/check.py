"""Check route."""

from fastapi import APIRouter

from ..schemas import CheckRequest, CheckResponse, ErrorDetail
from ..utils import run_check

router = APIRouter()


@router.post(
    "/check",
    response_model=CheckResponse,
    responses={400: {"model": ErrorDetail}, 404: {"model": ErrorDetail}},
)
def check(req: CheckRequest) -> CheckResponse:
    """Run every style rule and return the diagnostics."""
    issues = run_check(req)
    errors = sum(1 for i in issues if i.severity == "ERROR")
    return CheckResponse(issues=issues, error_count=errors, warning_count=len(issues) - errors)
