# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Three kinds of failure reach the client:
# - validation errors (missing/invalid input)       -> 400-class
# - configuration errors (env not set up)           -> 500 / 501
# - upstream errors (Supabase, n8n, webhooks)       -> upstream message forwarded
#
# Best-effort side calls (upload notifications, profile lookups inside the
# prompt composer, the vision model call) never raise these.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class DashboardException(Exception):
    """
    Base exception for the dashboard API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "DASHBOARD_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingFieldError(DashboardException):
    """Raised when a required request field is absent or empty."""

    def __init__(self, field: str):
        super().__init__(
            message=f"{field} is required",
            code="MISSING_FIELD",
            status_code=400,
            details={"field": field}
        )


class PromptInputError(DashboardException):
    """Raised when a prompt request names no image at all."""

    def __init__(self):
        super().__init__(
            message="Provide image (public URL) or name (object path in the products bucket)",
            code="PROMPT_INPUT_MISSING",
            status_code=400,
            suggestion="Pick a product from GET /api/v1/list/product and send its name",
        )


class InvalidFileTypeError(DashboardException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, mime_type: str | None):
        super().__init__(
            message=f"Invalid file type: {filename} ({mime_type or 'unknown'})",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion="Upload a PNG, JPEG, WebP or GIF image",
            details={"filename": filename, "mime_type": mime_type}
        )


class FileTooLargeError(DashboardException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================

class StorageConfigError(DashboardException):
    """Raised when an object name cannot be turned into a public URL."""

    def __init__(self):
        super().__init__(
            message="Missing storage base URL to resolve product image URL",
            code="STORAGE_NOT_CONFIGURED",
            status_code=500,
            suggestion="Set SUPABASE_URL, or send the full public image URL instead of a name",
        )


class WorkflowNotConfiguredError(DashboardException):
    """Raised when n8n settings needed by an endpoint are absent."""

    def __init__(self, setting: str, hint: str | None = None):
        super().__init__(
            message=f"{setting} not configured",
            code="WORKFLOW_NOT_CONFIGURED",
            status_code=501,
            suggestion=hint,
            details={"setting": setting}
        )


# =============================================================================
# Upstream Exceptions
# =============================================================================

class StorageError(DashboardException):
    """Raised when a Supabase Storage call fails."""

    def __init__(self, operation: str, error: str, bucket: str | None = None):
        details = {"operation": operation}
        if bucket:
            details["bucket"] = bucket
        super().__init__(
            message=error,
            code="STORAGE_ERROR",
            status_code=400,
            details=details
        )


class DatabaseError(DashboardException):
    """Raised when a Supabase table query fails."""

    def __init__(self, table: str, error: str):
        super().__init__(
            message=error,
            code="DATABASE_ERROR",
            status_code=400,
            details={"table": table}
        )


class WorkflowError(DashboardException):
    """
    Raised when the n8n REST API fails.

    status is None when n8n could not be reached at all; body then holds
    the transport error.
    """

    def __init__(self, action: str, status: int | None, body: str = ""):
        reason = f"{status} {body}" if status is not None else body
        super().__init__(
            message=f"n8n {action} failed: {reason}".strip(),
            code="WORKFLOW_ERROR",
            status_code=502,
            suggestion="Check N8N_BASE_URL, N8N_API_KEY and N8N_DAILY_WORKFLOW_ID",
            details={"upstream_status": status}
        )


class WebhookError(DashboardException):
    """Raised when the run-now webhook fails or answers with an error status."""

    def __init__(self, status: int | None, body: str):
        message = f"Webhook returned {status}" if status is not None else f"Webhook unreachable: {body}"
        super().__init__(
            message=message,
            code="WEBHOOK_ERROR",
            status_code=500,
            details={"upstream_status": status, "body": body}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def dashboard_exception_handler(
    request: Request,
    exc: DashboardException
) -> JSONResponse:
    """
    Convert DashboardException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages. The dashboard
    treats a malformed body like any other missing field, so this is a 400.
    """
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors())
        }
    )
