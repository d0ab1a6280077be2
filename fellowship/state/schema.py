"""
Pydantic models for fellowship run state.

The run catalog (RunConfig) is content configuration supplied by the caller.
RunState is the single value threaded through every engine operation; the
engine never mutates a RunState it was handed, it returns a new one.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class StatType(str, Enum):
    COMBAT = "combat"
    SURVIVAL = "survival"
    SOCIAL = "social"
    CHAOS = "chaos"


class GearType(str, Enum):
    EXTRA_SLOT = "extra_slot"        # +1 member slot, applied on pickup
    AUTO_SUCCESS = "auto_success"    # Stored; forces the next check of its stat
    HEAL = "heal"                    # Restores HP on pickup


class TacticType(str, Enum):
    PERMANENT_BOOST = "permanent_boost"        # Resolved at draft time
    NEXT_SEGMENT_BOOST = "next_segment_boost"  # Percentage boost for one segment
    SKIP_EVENT = "skip_event"                  # Next event is a free success


class SegmentType(str, Enum):
    COMBAT = "COMBAT"
    SURVIVAL = "SURVIVAL"
    SOCIAL = "SOCIAL"
    CHAOS = "CHAOS"
    COMBAT_SURVIVAL = "COMBAT/SURVIVAL"
    COMBAT_SOCIAL = "COMBAT/SOCIAL"
    COMBAT_CHAOS = "COMBAT/CHAOS"
    SURVIVAL_SOCIAL = "SURVIVAL/SOCIAL"
    SURVIVAL_CHAOS = "SURVIVAL/CHAOS"
    SOCIAL_CHAOS = "SOCIAL/CHAOS"

    @property
    def stats(self) -> list[StatType]:
        """Stats this segment draws its checks from."""
        return [StatType(part.lower()) for part in self.value.split("/")]

    @property
    def is_dual(self) -> bool:
        return "/" in self.value


SINGLE_STAT_SEGMENTS = [s for s in SegmentType if not s.is_dual]
DUAL_STAT_SEGMENTS = [s for s in SegmentType if s.is_dual]


class EventOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    MITIGATED_FAILURE = "MITIGATED_FAILURE"
    FAILURE = "FAILURE"


class CheckResult(str, Enum):
    PASS = "pass"    # value > threshold
    TIE = "tie"      # value == threshold
    FAIL = "fail"    # value < threshold


MemberRank = Literal[1, 2, 3]

# Partial stat map: leader base stats, temporary percentage boosts
StatBoosts = dict[StatType, int]


# -----------------------------------------------------------------------------
# Stats
# -----------------------------------------------------------------------------

class Stats(BaseModel):
    """Fellowship stat vector."""
    combat: int = 0
    survival: int = 0
    social: int = 0
    chaos: int = 0

    def get(self, stat: StatType) -> int:
        return getattr(self, stat.value)

    def total(self) -> int:
        return self.combat + self.survival + self.social + self.chaos

    def as_dict(self) -> dict[StatType, int]:
        return {stat: self.get(stat) for stat in StatType}


# -----------------------------------------------------------------------------
# Members and Leaders
# -----------------------------------------------------------------------------

class MemberTemplate(BaseModel):
    """Recruitable member definition from the catalog."""
    id: str
    name: str
    primary_stats: list[StatType] = Field(min_length=1)
    rank: MemberRank
    base_value: int
    scaling: int  # Added per level above 1
    description: str = ""


class MemberInstance(BaseModel):
    """A recruited member. Level only ever goes up."""
    id: str
    template_id: str
    name: str
    primary_stats: list[StatType] = Field(min_length=1)
    rank: MemberRank
    base_value: int
    scaling: int
    level: int = Field(default=1, ge=1)

    def is_primary(self, stat: StatType) -> bool:
        return stat in self.primary_stats


class Leader(BaseModel):
    id: str
    name: str
    description: str = ""
    base_stats: StatBoosts = Field(default_factory=dict)  # Missing stats count as 0
    bonus_hp: int = 0
    base_member_slots: int = 3
    tactics_pool_id: str | None = None


# -----------------------------------------------------------------------------
# Gear and Tactics
# -----------------------------------------------------------------------------

class Gear(BaseModel):
    id: str
    type: GearType
    name: str
    description: str = ""
    value: int = 0                     # Heal amount, slot count, or token magnitude
    stat_type: StatType | None = None  # auto_success only


class GearInstance(Gear):
    """Stored auto_success token."""
    instance_id: str
    used: bool = False


class Tactic(BaseModel):
    id: str
    type: TacticType
    name: str
    description: str = ""
    value: int = 0                     # Flat boost, or percentage for next_segment_boost
    stat_type: StatType | None = None
    target_member_id: str | None = None


class TacticInstance(Tactic):
    """Stored next_segment_boost."""
    instance_id: str
    expires_after_segment: int | None = None
    used: bool = False


# -----------------------------------------------------------------------------
# Segments and Events
# -----------------------------------------------------------------------------

class DamageTable(BaseModel):
    success: int = 0
    mitigated: int = 0
    failure: int = 0

    def for_outcome(self, outcome: EventOutcome) -> int:
        if outcome == EventOutcome.SUCCESS:
            return self.success
        if outcome == EventOutcome.MITIGATED_FAILURE:
            return self.mitigated
        return self.failure


class EventFlavor(BaseModel):
    """Name/description pair drawn for a generated event."""
    name: str
    description: str = ""


class EventDefinition(BaseModel):
    """
    A single check. check_type is one stat ("combat") or two joined
    with "+" ("combat+survival"), in which case both must pass.
    """
    id: str
    name: str
    description: str = ""
    check_type: str
    thresholds: StatBoosts = Field(default_factory=dict)
    damage: DamageTable = Field(default_factory=DamageTable)

    @field_validator("check_type")
    @classmethod
    def _valid_check_type(cls, value: str) -> str:
        parts = value.split("+")
        if len(parts) > 2 or len(set(parts)) != len(parts):
            raise ValueError(f"Invalid check type: {value}")
        for part in parts:
            StatType(part)
        return value

    @property
    def check_stats(self) -> list[StatType]:
        return [StatType(part) for part in self.check_type.split("+")]

    @property
    def is_combined(self) -> bool:
        return "+" in self.check_type


class SegmentDefinition(BaseModel):
    index: int = Field(ge=1, le=10)
    type: SegmentType
    events: list[EventDefinition] = Field(min_length=3, max_length=3)


# -----------------------------------------------------------------------------
# Run State
# -----------------------------------------------------------------------------

class RunState(BaseModel):
    """Complete snapshot of a run."""
    leader_id: str
    leader: Leader
    hp: int
    max_hp: int
    stats: Stats = Field(default_factory=Stats)
    members: list[MemberInstance] = Field(default_factory=list)
    member_slots: int
    segment_index: int = 1  # 1-based; the run is over past 10
    segments: list[SegmentDefinition] = Field(default_factory=list)
    gear: list[GearInstance] = Field(default_factory=list)
    tactics: list[TacticInstance] = Field(default_factory=list)
    # member_id -> stat -> cumulative bonus
    permanent_boosts: dict[str, StatBoosts] = Field(default_factory=dict)
    rng_seed: str
    event_log: list[str] = Field(default_factory=list)
    skip_next_event: bool = False

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def victorious(self) -> bool:
        return self.hp > 0 and self.segment_index > 10

    @property
    def open_slots(self) -> int:
        return max(0, self.member_slots - len(self.members))

    @property
    def current_segment(self) -> SegmentDefinition | None:
        for segment in self.segments:
            if segment.index == self.segment_index:
                return segment
        return None

    @property
    def active_gear(self) -> list[GearInstance]:
        return [g for g in self.gear if not g.used]


# -----------------------------------------------------------------------------
# Draft Options
# -----------------------------------------------------------------------------

class MemberOption(BaseModel):
    type: Literal["member"] = "member"
    description: str
    payload: MemberTemplate


class GearOption(BaseModel):
    type: Literal["gear"] = "gear"
    description: str
    payload: Gear


class TacticOption(BaseModel):
    type: Literal["tactic"] = "tactic"
    description: str
    payload: Tactic


DraftOption = Annotated[
    Union[MemberOption, GearOption, TacticOption],
    Field(discriminator="type"),
]


# -----------------------------------------------------------------------------
# Run Catalog
# -----------------------------------------------------------------------------

class RunConfig(BaseModel):
    """
    Content catalog for a run.

    Built once by the caller and passed to every engine function that needs
    content. The tunable constants are carried for content authors and
    tooling; the engine reads gear and tactic values off the items themselves.
    """
    base_hp: int
    base_member_slots: int
    leaders: list[Leader]
    member_templates: list[MemberTemplate]
    gear_templates: list[Gear]
    tactic_templates: list[Tactic]
    event_flavors: dict[StatType, list[EventFlavor]]  # load_catalog fills the default pool when absent
    tactic_pools: dict[str, list[Tactic]] = Field(default_factory=dict)
    starting_member_ids: list[str] = Field(default_factory=list)

    heal_amount: int = 15
    auto_success_value: int = 100
    permanent_boost_value: int = 5
    next_segment_boost_percent: int = 100

    def get_leader(self, leader_id: str) -> Leader | None:
        for leader in self.leaders:
            if leader.id == leader_id:
                return leader
        return None

    def get_member_template(self, template_id: str) -> MemberTemplate | None:
        for template in self.member_templates:
            if template.id == template_id:
                return template
        return None

    def templates_of_rank(self, rank: int) -> list[MemberTemplate]:
        return [t for t in self.member_templates if t.rank == rank]

    def tactics_for_leader(self, leader: Leader) -> list[Tactic]:
        """Leader's themed pool (if any) followed by the generic tactics."""
        pool = self.tactic_pools.get(leader.tactics_pool_id) if leader.tactics_pool_id else None
        if pool:
            return [*pool, *self.tactic_templates]
        return list(self.tactic_templates)
