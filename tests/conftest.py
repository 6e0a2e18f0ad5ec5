import itertools
import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from savepicker.storage import InMemoryStorage  # noqa: E402


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def clock():
    """Epoch-ms clock that advances one second per call."""
    counter = itertools.count(1_700_000_000_000, 1000)
    return lambda: next(counter)
