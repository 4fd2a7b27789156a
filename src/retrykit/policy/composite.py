r"""Retry policy combining several policies."""

from __future__ import annotations

__all__ = ["CompositeRetryPolicy"]

import logging
from typing import TYPE_CHECKING

from retrykit.context import RetryContext
from retrykit.policy.base import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: logging.Logger = logging.getLogger(__name__)

CHILDREN_ATTRIBUTE = "composite_retry_policy.children"


class CompositeRetryPolicy(RetryPolicy):
    """Retry policy that delegates to several policies.

    Each child policy gets its own context, opened and closed together
    with the composite context. Failures are registered in every child
    context and in the composite context.

    Args:
        policies: The child policies. Must not be empty.
        optimistic: If False (default), another attempt is permitted only
            when every child permits it. If True, one child is enough.

    Raises:
        ValueError: If ``policies`` is empty.

    Example:
        ```pycon
        >>> from retrykit.policy import (
        ...     CompositeRetryPolicy,
        ...     MaxAttemptsRetryPolicy,
        ...     TimeoutRetryPolicy,
        ... )
        >>> policy = CompositeRetryPolicy(
        ...     [MaxAttemptsRetryPolicy(5), TimeoutRetryPolicy(timeout=30.0)]
        ... )
        >>> context = policy.open()
        >>> policy.can_retry(context)
        True

        ```
    """

    def __init__(self, policies: Sequence[RetryPolicy], optimistic: bool = False) -> None:
        if not policies:
            msg = "policies must contain at least one retry policy"
            raise ValueError(msg)
        self.policies = tuple(policies)
        self.optimistic = optimistic

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(policies={list(self.policies)!r}, "
            f"optimistic={self.optimistic})"
        )

    def open(self, parent: RetryContext | None = None) -> RetryContext:
        context = RetryContext(parent)
        opened: list[tuple[RetryPolicy, RetryContext]] = []
        try:
            for policy in self.policies:
                opened.append((policy, policy.open(parent)))
        except Exception:
            for policy, child in reversed(opened):
                try:
                    policy.close(child)
                except Exception as exc:
                    logger.debug(f"Failed to close context of {policy!r}: {exc}")
            raise
        context.attributes[CHILDREN_ATTRIBUTE] = tuple(child for _, child in opened)
        return context

    def can_retry(self, context: RetryContext) -> bool:
        if context.exhausted_only:
            return False
        decisions = (
            policy.can_retry(child)
            for policy, child in zip(self.policies, self._children(context))
        )
        return any(decisions) if self.optimistic else all(decisions)

    def register_failure(self, context: RetryContext, failure: BaseException) -> None:
        for policy, child in zip(self.policies, self._children(context)):
            policy.register_failure(child, failure)
        context.record_failure(failure)

    def close(self, context: RetryContext) -> None:
        """Close every child context.

        All children are closed even if one of them fails; the first
        error is raised once every child has been closed.
        """
        error: Exception | None = None
        for policy, child in zip(self.policies, self._children(context)):
            try:
                policy.close(child)
            except Exception as exc:
                logger.debug(f"Failed to close context of {policy!r}: {exc}")
                if error is None:
                    error = exc
        if error is not None:
            raise error

    def _children(self, context: RetryContext) -> tuple[RetryContext, ...]:
        return context.attributes[CHILDREN_ATTRIBUTE]
