"""
Settings Module — Typed configuration tables for the scoring engine.

Every formula in cockpit.workload and cockpit.governance is parameterized by
these tables. The tables arrive as row lists (the shape the cockpit edits and
stores) and are indexed once into dicts, so lookups are exact-key matches.

FALLBACKS (applied when a key has no row):
=========================================

stage multiplier   -> 0.30, not committed
role weight        -> 1.00, category Execution
complexity factor  -> 1.00
default allocation -> 50%
grade capacity     -> fallback_grade (zero-capacity sentinel "Unassigned"; risk tier forced Red)

A settings change is a whole replacement object; nothing here mutates.
"""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic.alias_generators import to_camel

# =============================================================================
# FALLBACK CONSTANTS
# =============================================================================

DEFAULT_STAGE_MULTIPLIER = 0.3
DEFAULT_ROLE_WEIGHT = 1.0
DEFAULT_COMPLEXITY_FACTOR = 1.0
DEFAULT_ALLOCATION_PCT = 50.0
DEFAULT_CAPACITY_MODIFIER = 10


class CamelModel(BaseModel):
    """Base model accepting both snake_case and the snapshot's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoleCategory(str, Enum):
    """Where a role's points land in the per-person breakdown."""

    OVERSIGHT = "Oversight"
    DELIVERY_LEAD = "DeliveryLead"
    EXECUTION = "Execution"
    PEOPLE_MANAGEMENT = "PeopleManagement"
    EXTERNAL = "External"


# =============================================================================
# TABLE ROWS
# =============================================================================


class StageMultiplier(CamelModel):
    # legacy rows key the stage as `stage`
    lifecycle_id: str = Field(validation_alias=AliasChoices("lifecycleId", "lifecycle_id", "stage"))
    multiplier: float = Field(ge=0.0, le=1.0)
    is_committed: bool = False
    notes: str = ""


class RoleWeight(CamelModel):
    role: str
    weight: float = Field(ge=0.0)
    category: RoleCategory = RoleCategory.EXECUTION
    notes: str = ""


class DefaultAllocation(CamelModel):
    role: str
    percent: float = Field(ge=0.0)
    notes: str = ""


class GradeCapacity(CamelModel):
    """Baseline weekly capacity for a grade. Targets are informational only."""

    grade: str
    weekly_points: float = Field(ge=0.0)
    max_current: int = Field(ge=0)
    max_total: int = Field(ge=0)
    target_exec_pct: float = 0.0
    target_oversight_pct: float = 0.0
    budget_detail: str = ""
    notes: str = ""


class ComplexityFactor(CamelModel):
    level: int = Field(ge=1, le=5)
    factor: float = Field(ge=0.0)
    notes: str = ""


class BurnoutConfig(CamelModel):
    """Named scalar constants of the burnout and fairness policy."""

    penalty_per_extra_current_item: float = 0.80
    penalty_per_extra_total_item: float = 0.40
    per_direct_report_weight: float = 0.25
    amber_threshold: float = 50.0
    red_threshold: float = 70.0
    fairness_band: float = 25.0


UNASSIGNED_GRADE = GradeCapacity(
    grade="Unassigned",
    weekly_points=0.0,
    max_current=0,
    max_total=0,
    notes="Sentinel for grades missing from grade_capacities",
)


class StageInfo(CamelModel):
    multiplier: float
    is_committed: bool


class RoleInfo(CamelModel):
    weight: float
    category: RoleCategory


FALLBACK_STAGE = StageInfo(multiplier=DEFAULT_STAGE_MULTIPLIER, is_committed=False)
FALLBACK_ROLE = RoleInfo(weight=DEFAULT_ROLE_WEIGHT, category=RoleCategory.EXECUTION)


# =============================================================================
# WORKLOAD SETTINGS
# =============================================================================


class WorkloadSettings(CamelModel):
    """
    The workload engine's configuration tables.

    Duplicate keys resolve to the first row, matching how the cockpit's
    settings editor lists them.
    """

    stage_multipliers: list[StageMultiplier] = Field(default_factory=list)
    role_weights: list[RoleWeight] = Field(default_factory=list)
    default_allocations: list[DefaultAllocation] = Field(default_factory=list)
    grade_capacities: list[GradeCapacity] = Field(default_factory=list)
    complexity_factors: list[ComplexityFactor] = Field(default_factory=list)
    burnout_config: BurnoutConfig = Field(default_factory=BurnoutConfig)
    fallback_grade: GradeCapacity = Field(default_factory=lambda: UNASSIGNED_GRADE.model_copy())

    _stages: dict[str, StageInfo] = PrivateAttr(default_factory=dict)
    _roles: dict[str, RoleInfo] = PrivateAttr(default_factory=dict)
    _allocations: dict[str, float] = PrivateAttr(default_factory=dict)
    _grades: dict[str, GradeCapacity] = PrivateAttr(default_factory=dict)
    _complexity: dict[int, float] = PrivateAttr(default_factory=dict)

    @field_validator("burnout_config", mode="before")
    @classmethod
    def _burnout_rows_to_mapping(cls, value):
        # Stored snapshots carry burnout constants as [{key, value, unit, notes}] rows
        if not isinstance(value, list):
            return value
        mapping = {}
        for row in value:
            if not isinstance(row, dict) or "key" not in row:
                raise ValueError(f"burnout config row must be a mapping with a key, got {row!r}")
            # a row without a value is left as None for field validation to reject
            mapping[row["key"]] = row.get("value")
        return mapping

    def model_post_init(self, __context) -> None:
        for row in self.stage_multipliers:
            self._stages.setdefault(
                row.lifecycle_id,
                StageInfo(multiplier=row.multiplier, is_committed=row.is_committed),
            )
        for row in self.role_weights:
            self._roles.setdefault(row.role, RoleInfo(weight=row.weight, category=row.category))
        for row in self.default_allocations:
            self._allocations.setdefault(row.role, row.percent)
        for row in self.grade_capacities:
            self._grades.setdefault(row.grade, row)
        for row in self.complexity_factors:
            self._complexity.setdefault(row.level, row.factor)

    def stage_for(self, lifecycle_id: str) -> StageInfo:
        return self._stages.get(lifecycle_id, FALLBACK_STAGE)

    def role_for(self, role_key: str) -> RoleInfo:
        return self._roles.get(role_key, FALLBACK_ROLE)

    def complexity_factor(self, level: int) -> float:
        return self._complexity.get(level, DEFAULT_COMPLEXITY_FACTOR)

    def default_allocation(self, role_key: str) -> float:
        return self._allocations.get(role_key, DEFAULT_ALLOCATION_PCT)

    def has_grade(self, grade: str) -> bool:
        return grade in self._grades

    def grade_for(self, grade: str) -> GradeCapacity:
        """Capacity row for a grade; unknown grades get fallback_grade."""
        return self._grades.get(grade, self.fallback_grade)


# =============================================================================
# GOVERNANCE / HEALTH WEIGHTS
# =============================================================================


class HealthWeights(CamelModel):
    """Penalties of the portfolio health index (100 = healthy)."""

    impact_weight: dict[str, float] = Field(
        default_factory=lambda: {"High": 15.0, "Medium": 8.0, "Low": 3.0}
    )
    default_impact_weight: float = 5.0
    overdue_penalty: float = 10.0
    blocked_penalty: float = 20.0
    no_report_penalty: float = 25.0
    stale_penalty_per_day: float = 2.0
    stale_penalty_cap: float = 30.0
    missing_role_penalty: float = 15.0
    # work type id -> role keys that must be staffed by an internal person
    required_roles_by_type: dict[str, list[str]] = Field(default_factory=dict)


class GovernanceRules(CamelModel):
    """Staleness and escalation rules of the RAG classifier."""

    stale_report_days_critical: int = 7
    stale_report_days_standard: int = 14
    critical_stages: list[str] = Field(default_factory=lambda: ["L-CUR", "L-PRO"])
    flag_open_high_risks: bool = False
    risk_volume_threshold: int | None = None


class ReportingCadence(CamelModel):
    expected_update_days_by_lifecycle: dict[str, int] = Field(default_factory=dict)
    default_expected_update_days: int = 14

    def expected_days(self, lifecycle_id: str) -> int:
        return self.expected_update_days_by_lifecycle.get(
            lifecycle_id, self.default_expected_update_days
        )


class Weights(CamelModel):
    health: HealthWeights = Field(default_factory=HealthWeights)
    governance: GovernanceRules = Field(default_factory=GovernanceRules)
    reporting: ReportingCadence = Field(default_factory=ReportingCadence)


# =============================================================================
# TAXONOMY
# =============================================================================


class TaxonomyEntry(CamelModel):
    id: str
    name: str


class RoleKey(CamelModel):
    key: str
    name: str


class Taxonomy(CamelModel):
    units: list[TaxonomyEntry] = Field(default_factory=list)
    lifecycle: list[TaxonomyEntry] = Field(default_factory=list)
    work_types: list[TaxonomyEntry] = Field(default_factory=list)
    role_keys: list[RoleKey] = Field(default_factory=list)


class CockpitSettings(CamelModel):
    """Everything the engine reads from `snapshot.settings`."""

    workload: WorkloadSettings = Field(default_factory=WorkloadSettings)
    weights: Weights = Field(default_factory=Weights)
    taxonomy: Taxonomy = Field(default_factory=Taxonomy)

