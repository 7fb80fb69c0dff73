"""
Workload settings version history.

Each accepted edit of the workload tables is recorded as a WorkloadVersion
(timestamp, editor, note, full config). The history is newest-first and
keeps only the most recent MAX_VERSIONS entries. The scoring engine never
reads it; it exists for the settings screen's audit and rollback.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from cockpit.contracts.settings import WorkloadSettings

logger = logging.getLogger(__name__)

MAX_VERSIONS = 50


@dataclass(frozen=True)
class WorkloadVersion:
    id: str
    ts: str
    user_id: str
    config: WorkloadSettings
    note: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ts": self.ts,
            "user_id": self.user_id,
            "config": self.config.model_dump(by_alias=True),
            "note": self.note,
        }


class SettingsHistory:
    """Bounded, newest-first log of workload settings versions."""

    def __init__(self, versions: list[WorkloadVersion] | None = None, max_versions: int = MAX_VERSIONS):
        self._max_versions = max_versions
        self._versions: list[WorkloadVersion] = list(versions or [])[:max_versions]

    def record(
        self,
        settings: WorkloadSettings,
        user_id: str,
        note: str = "",
        ts: datetime | None = None,
    ) -> WorkloadVersion:
        """Prepend a version; the oldest beyond the cap is dropped."""
        version = WorkloadVersion(
            id=f"V-{uuid.uuid4().hex[:12]}",
            ts=(ts or datetime.now(UTC)).isoformat(),
            user_id=user_id,
            config=settings,
            note=note or "Update",
        )
        self._versions = [version, *self._versions][: self._max_versions]
        logger.info("Recorded workload settings version %s by %s", version.id, user_id)
        return version

    @property
    def versions(self) -> list[WorkloadVersion]:
        return list(self._versions)

    def latest(self) -> WorkloadVersion | None:
        return self._versions[0] if self._versions else None

    def get(self, version_id: str) -> WorkloadVersion | None:
        return next((v for v in self._versions if v.id == version_id), None)

    def __len__(self) -> int:
        return len(self._versions)
