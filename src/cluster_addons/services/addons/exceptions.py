"""Add-on installation exceptions."""

from __future__ import annotations


class AddonError(Exception):
    """An add-on step failed.

    ``message`` names the step; ``cause`` is the underlying failure and is
    appended when rendered, e.g. ``Flagger deployment failed: Helm command
    failed: ...``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class MissingOptionError(AddonError):
    """A required option was empty."""

    def __init__(self, option: str) -> None:
        super().__init__(f"missing option: --{option}")
        self.option = option
