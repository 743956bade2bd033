"""ServiceResult and ServiceError — what every service operation returns.

Services never print and never exit. They describe the outcome, and the
CLI decides where it goes (stdout or stderr) and with which exit code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation could not produce its payload.

    ``code`` is a stable upper-case identifier (``NOT_FOUND``,
    ``NO_CONTENT_ROOT``); ``detail`` carries the offending values.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    A result that is ``ok`` may still describe an unhealthy site: the
    ``check`` payload reports problems as data, not as an error.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
