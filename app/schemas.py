"""Pydantic request/response models."""

from typing import List, Optional

from pydantic import BaseModel, Field

from c_style_checker.context import StyleMode


# --- Request ---


class CheckRequest(BaseModel):
    """Unified request: either code (+ filename) or file_path."""

    code: Optional[str] = Field(default=None, description="C source text to check")
    filename: Optional[str] = Field(default="input.c", description="Virtual filename; '.h' enables header checks")
    file_path: Optional[str] = Field(default=None, description="Absolute path to a source file on the server")
    style: Optional[StyleMode] = Field(default=None, description="kr or allman; server default when omitted")


# --- Issue (response) ---


class IssueOut(BaseModel):
    """Single style diagnostic."""

    severity: str = Field(..., description="ERROR or WARNING")
    line_number: int
    column: int = Field(..., description="0-based column of the offending span")
    length: int
    message: str
    kind: str
    file_path: Optional[str] = Field(default=None, description="File path this issue belongs to")


# --- Responses ---


class CheckResponse(BaseModel):
    """Response for POST /check."""

    issues: List[IssueOut] = Field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = "ok"


class ErrorDetail(BaseModel):
    """Error response detail."""

    detail: str = Field(..., description="Error message")
