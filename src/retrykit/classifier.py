r"""Classification of exceptions into retryable and non-retryable kinds."""

from __future__ import annotations

__all__ = ["ExceptionClassifier", "RetryableSpec"]

from collections.abc import Callable, Mapping, Sequence
from typing import Union

RetryableSpec = Union[
    Mapping[type[BaseException], bool],
    Sequence[type[BaseException]],
    Callable[[BaseException], bool],
    None,
]


class ExceptionClassifier:
    """Decide whether an exception is retryable.

    The classification rules are resolved once at construction:

    - ``None`` or an empty collection: every ``Exception`` is retryable
    - a sequence of exception classes: instances of those classes are
      retryable, anything else is not
    - a mapping of exception class to bool: the nearest class in the
      exception's MRO decides, unmatched exceptions use ``default``
    - a callable: the predicate decides

    ``BaseException`` subclasses that are not ``Exception`` (for example
    ``KeyboardInterrupt``) are never retryable unless explicitly listed.

    Args:
        retryable: The classification rules.
        default: The value for exceptions not matched by a mapping.

    Example:
        ```pycon
        >>> from retrykit.classifier import ExceptionClassifier
        >>> classifier = ExceptionClassifier({OSError: True, FileNotFoundError: False})
        >>> classifier.classify(ConnectionError())
        True
        >>> classifier.classify(FileNotFoundError())
        False
        >>> classifier.classify(ValueError())
        False

        ```
    """

    def __init__(self, retryable: RetryableSpec = None, default: bool = False) -> None:
        self._predicate: Callable[[BaseException], bool] | None = None
        self._classes: dict[type[BaseException], bool] = {}
        self.default = default
        if isinstance(retryable, type):
            retryable = (retryable,)
        if callable(retryable) and not isinstance(retryable, type):
            self._predicate = retryable
        elif not retryable:
            self._classes = {Exception: True}
        elif isinstance(retryable, Mapping):
            self._classes = dict(retryable)
        else:
            self._classes = dict.fromkeys(retryable, True)
        for kind in self._classes:
            if not (isinstance(kind, type) and issubclass(kind, BaseException)):
                msg = f"retryable kinds must be exception classes, got {kind!r}"
                raise TypeError(msg)

    def __repr__(self) -> str:
        rules = self._predicate if self._predicate is not None else self._classes
        return f"{self.__class__.__qualname__}({rules!r}, default={self.default})"

    def classify(self, failure: BaseException | None) -> bool:
        """Return whether ``failure`` is retryable.

        Args:
            failure: The exception to classify. ``None`` is classified as
                ``default``.

        Returns:
            True if the exception is retryable.
        """
        if failure is None:
            return self.default
        if self._predicate is not None:
            return bool(self._predicate(failure))
        for kind in type(failure).__mro__:
            if kind in self._classes:
                return self._classes[kind]
        return self.default
