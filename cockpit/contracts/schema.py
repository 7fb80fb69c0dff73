"""
Schema Module — Pydantic Models for the Organizational Snapshot.

These models define the shape the scoring engine may assume. The engine
performs no defensive checks of its own: anything structurally wrong must be
rejected here, at the snapshot boundary, before scoring starts.

- Lists (staffing, raid, reports) are always present; missing lists become empty.
- A staffing entry names an internal person OR an external party, never both.
- Timestamps are parsed to datetimes; naive values are read as UTC.
"""

from datetime import UTC, datetime

from pydantic import Field, field_validator, model_validator

from .settings import DEFAULT_CAPACITY_MODIFIER, CamelModel, CockpitSettings

SCHEMA_VERSION = "10.1.0"

CLOSED_STATUS = "Closed"
BLOCKED_STATUS = "Blocked"
RISK_TYPE = "Risk"
HIGH_IMPACT = "High"


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes; aware values pass through."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def resolve_now(now: datetime | None = None) -> datetime:
    """The evaluation instant: `now` if given (read as UTC when naive), else the clock."""
    return as_utc(now) if now is not None else datetime.now(UTC)


# =============================================================================
# PEOPLE
# =============================================================================


class PersonProfile(CamelModel):
    availability: str = "Active"
    capacity_modifier: float | None = Field(default=DEFAULT_CAPACITY_MODIFIER, ge=0)
    skills: list[str] = Field(default_factory=list)
    notes: str = ""
    direct_reports: list[str] = Field(default_factory=list)


class Person(CamelModel):
    """A member of staff. Managers are referenced by id only."""

    id: str
    code: str = ""
    name: str = ""
    title: str = ""
    unit_id: str = ""
    grade: str = ""
    formal_manager_id: str | None = None
    dotted_manager_id: str | None = None
    profile: PersonProfile = Field(default_factory=PersonProfile)

    @property
    def capacity_modifier(self) -> float:
        modifier = self.profile.capacity_modifier
        return DEFAULT_CAPACITY_MODIFIER if modifier is None else modifier


# =============================================================================
# WORK ITEMS
# =============================================================================


class StaffingEntry(CamelModel):
    role_key: str
    person_id: str | None = None
    external_name: str | None = None
    allocation: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _internal_or_external(self) -> "StaffingEntry":
        if self.person_id and self.external_name:
            raise ValueError(
                f"staffing entry for role {self.role_key} names both "
                f"person {self.person_id} and external {self.external_name}"
            )
        return self


class WorkItem(CamelModel):
    """An engagement, proposal or discussion in some lifecycle stage."""

    id: str
    name: str = ""
    type_id: str = ""
    lifecycle_id: str
    team_unit_id: str = ""
    complexity: int = 3
    staffing: list[StaffingEntry] = Field(default_factory=list)

    @field_validator("staffing", mode="before")
    @classmethod
    def _staffing_list(cls, value):
        return [] if value is None else value

    def assignment_for(self, person_id: str) -> StaffingEntry | None:
        """First staffing entry naming the person, if any."""
        return next((s for s in self.staffing if s.person_id == person_id), None)


# =============================================================================
# PACKS (RAID + REPORTS)
# =============================================================================


class RaidItem(CamelModel):
    id: str
    type: str
    status: str = "Open"
    impact: str = "Medium"
    probability: str = "Medium"
    title: str = ""
    due: datetime | None = None

    @field_validator("due")
    @classmethod
    def _due_utc(cls, value):
        return as_utc(value)

    @property
    def is_open_risk(self) -> bool:
        return self.type == RISK_TYPE and self.status != CLOSED_STATUS

    def is_overdue(self, now: datetime) -> bool:
        return self.due is not None and self.due < now


class Report(CamelModel):
    id: str
    ts: datetime
    rag: str = "Green"
    summary: str = ""
    by: str | None = None

    @field_validator("ts")
    @classmethod
    def _ts_utc(cls, value):
        return as_utc(value)


class Pack(CamelModel):
    raid: list[RaidItem] = Field(default_factory=list)
    reports: list[Report] = Field(default_factory=list)

    @field_validator("raid", "reports", mode="before")
    @classmethod
    def _lists(cls, value):
        return [] if value is None else value

    def open_risks(self) -> list[RaidItem]:
        return [r for r in self.raid if r.is_open_risk]


# =============================================================================
# SNAPSHOT
# =============================================================================


class SnapshotMeta(CamelModel):
    schema_version: str = SCHEMA_VERSION
    updated_at: str = ""


class Snapshot(CamelModel):
    """
    Read-only organizational snapshot consumed by every scoring function.

    `meta.updated_at` is bumped by the state owner on every mutation and
    serves as the revision marker for score caching.
    """

    meta: SnapshotMeta = Field(default_factory=SnapshotMeta)
    people: list[Person] = Field(default_factory=list)
    work_items: list[WorkItem] = Field(default_factory=list)
    packs: dict[str, Pack] = Field(default_factory=dict)
    settings: CockpitSettings = Field(default_factory=CockpitSettings)

    @property
    def revision(self) -> str:
        return self.meta.updated_at

    def person(self, person_id: str | None) -> Person | None:
        if not person_id:
            return None
        return next((p for p in self.people if p.id == person_id), None)

    def work_item(self, work_id: str) -> WorkItem | None:
        return next((w for w in self.work_items if w.id == work_id), None)

    def pack(self, work_id: str) -> Pack | None:
        return self.packs.get(work_id)
