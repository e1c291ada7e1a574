"""Error taxonomy shared by every service.

Each error is an HTTPException so routers can let it propagate; the handler
in main.py adds the machine-readable ``kind`` to the response body.
"""
from typing import Optional
from fastapi import HTTPException, status


class SwapError(HTTPException):
    kind = "internal"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code_default, detail=detail)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.detail}


class Unauthenticated(SwapError):
    kind = "unauthenticated"
    status_code_default = status.HTTP_401_UNAUTHORIZED


class ValidationFailed(SwapError):
    kind = "validation"
    status_code_default = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFound(SwapError):
    kind = "not_found"
    status_code_default = status.HTTP_404_NOT_FOUND


class Forbidden(SwapError):
    kind = "forbidden"
    status_code_default = status.HTTP_403_FORBIDDEN


class Conflict(SwapError):
    kind = "conflict"
    status_code_default = status.HTTP_409_CONFLICT


class RuleViolation(SwapError):
    kind = "rule_violation"
    status_code_default = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, detail: str, reason: Optional[str] = None):
        super().__init__(detail)
        self.reason = reason

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["reason"] = self.reason
        return body


class Internal(SwapError):
    pass
