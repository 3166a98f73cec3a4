from typing import Any


class FamspendError(Exception):
    pass


class BackendError(FamspendError):
    """A remote procedure (or auth endpoint) answered with a failure."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint
        self.status_code = status_code

    @classmethod
    def from_payload(cls, payload: Any, status_code: int) -> "BackendError":
        if isinstance(payload, dict):
            message = (
                payload.get("message")
                or payload.get("msg")
                or payload.get("error_description")
                or payload.get("error")
                or f"HTTP {status_code}"
            )
            return cls(
                str(message),
                code=payload.get("code"),
                details=payload.get("details"),
                hint=payload.get("hint"),
                status_code=status_code,
            )
        text = str(payload).strip() if payload else ""
        return cls(text or f"HTTP {status_code}", status_code=status_code)

    def with_prefix(self, prefix: str) -> "BackendError":
        return type(self)(
            f"{prefix}: {self.message}",
            code=self.code,
            details=self.details,
            hint=self.hint,
            status_code=self.status_code,
        )


class TransportError(BackendError):
    pass


class NotAuthenticated(FamspendError):
    pass


class ValidationFailure(FamspendError):
    pass


class NoFamilyError(FamspendError):
    pass
