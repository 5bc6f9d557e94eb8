"""RFC 7807 Problem Details error handling."""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        error_type: str | None = None,
    ):
        super().__init__(detail)
        self.status = status
        self.title = title
        self.detail = detail
        self.error_type = error_type or "about:blank"

    def extensions(self) -> dict[str, Any]:
        """Extra problem members merged into the response body."""
        return {}


class InvalidConfigError(ProblemDetailError):
    """A page configuration failed validation. Carries every violation found."""

    def __init__(self, violations: list, detail: str = "Page configuration is invalid"):
        super().__init__(
            status=422,
            title="Invalid Config",
            detail=detail,
            error_type="invalid-config",
        )
        self.violations = violations

    def extensions(self) -> dict[str, Any]:
        return {"errors": [v.model_dump() for v in self.violations]}


class NotFoundError(ProblemDetailError):
    def __init__(self, detail: str = "Page not found"):
        super().__init__(status=404, title="Not Found", detail=detail, error_type="not-found")


class NoDraftError(ProblemDetailError):
    def __init__(self, detail: str = "No draft config found. Save a draft first."):
        super().__init__(status=409, title="No Draft", detail=detail, error_type="no-draft")


class ForbiddenError(ProblemDetailError):
    def __init__(self, detail: str = "Not allowed to modify this resource"):
        super().__init__(status=403, title="Forbidden", detail=detail, error_type="forbidden")


class SlugTakenError(ProblemDetailError):
    def __init__(self, slug: str):
        super().__init__(
            status=409,
            title="Slug Taken",
            detail=f"Slug '{slug}' is already taken",
            error_type="slug-taken",
        )


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status,
        content={
            "type": exc.error_type,
            "title": exc.title,
            "status": exc.status,
            "detail": exc.detail,
            "instance": str(request.url.path),
            **exc.extensions(),
        },
        media_type="application/problem+json",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "type": "about:blank",
            "title": exc.detail if isinstance(exc.detail, str) else "Error",
            "status": exc.status_code,
            "detail": exc.detail,
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "type": "about:blank",
            "title": "Validation Error",
            "status": 422,
            "detail": jsonable_errors(exc.errors()),
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


def jsonable_errors(errors) -> list[dict]:
    """Drop non-serializable ``ctx`` payloads (e.g. the raised ValueError)."""
    cleaned = []
    for err in errors:
        err = dict(err)
        ctx = err.get("ctx")
        if ctx:
            err["ctx"] = {k: str(v) for k, v in ctx.items()}
        cleaned.append(err)
    return cleaned
