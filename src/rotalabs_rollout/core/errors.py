"""Errors raised by remote config condition evaluation."""

FAILED_PRECONDITION = "failed-precondition"


class RemoteConfigError(Exception):
    """Fatal evaluation error.

    Raised when a condition cannot be decided because its input is malformed
    (for example a percent condition without an operator). It aborts the
    whole batch being evaluated.

    Attributes:
        code: Machine-readable error code, e.g. ``"failed-precondition"``.
        message: Human-readable description.
    """

    def __init__(self, code: str, message: str):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"RemoteConfigError(code={self.code!r}, message={self.message!r})"
