"""Error types shared by the project creation workflow."""

from __future__ import annotations


class CodedError(Exception):
    """An error carrying a machine-readable code next to its message."""

    def __init__(self, code: str, message: str, cause: BaseException | None = None) -> None:
        self.code = code
        self.message = message
        self.cause = cause
        super().__init__(str(self))
        self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        if not self.message:
            return str(self.cause)
        return f"{self.message}: {self.cause}"

    def __repr__(self) -> str:
        return f"CodedError(code={self.code!r}, message={self.message!r}, cause={self.cause!r})"