r"""Back-off policy without delay."""

from __future__ import annotations

__all__ = ["NoBackOffPolicy"]

from typing import TYPE_CHECKING

from retrykit.backoff.base import BackOffPolicy

if TYPE_CHECKING:
    from retrykit.context import RetryContext


class NoBackOffPolicy(BackOffPolicy):
    """Back-off policy that retries immediately.

    This is the default back-off policy of ``RetryTemplate``.
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def back_off(self, context: RetryContext) -> None:  # noqa: ARG002
        return
