from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from tests.helpers import SpyBackOffPolicy, SpyRetryPolicy

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def spy_policy() -> SpyRetryPolicy:
    """Create a spy around ``SimpleRetryPolicy(max_attempts=3)``."""
    return SpyRetryPolicy()


@pytest.fixture
def spy_backoff() -> SpyBackOffPolicy:
    """Create a spy back-off policy that never waits."""
    return SpyBackOffPolicy()
