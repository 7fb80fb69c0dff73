"""
Test configuration — ensures repo root is in sys.path + shared fixtures.

This allows tests to import from top-level packages (cockpit, tests.fixtures).
"""

import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import cockpit.*, tests.fixtures.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from cockpit.config import load_settings  # noqa: E402
from cockpit.contracts import Pack, Snapshot  # noqa: E402
from tests.fixtures import make_report  # noqa: E402


@pytest.fixture(scope="session")
def cockpit_settings():
    """The packaged default settings."""
    return load_settings()


@pytest.fixture
def snapshot_factory(cockpit_settings):
    """Build a Snapshot on the default settings unless overridden."""

    def _build(people=(), work_items=(), packs=None, revision="rev-1", settings=None):
        return Snapshot(
            meta={"updated_at": revision},
            people=list(people),
            work_items=list(work_items),
            packs=packs or {},
            settings=settings or cockpit_settings,
        )

    return _build


@pytest.fixture
def fresh_pack():
    """A pack with a report filed at NOW and no RAID entries."""
    return Pack(reports=[make_report("R-1", 0)])
