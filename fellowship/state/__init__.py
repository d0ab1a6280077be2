"""State models for fellowship runs."""

from .schema import (
    StatType,
    GearType,
    TacticType,
    SegmentType,
    EventOutcome,
    CheckResult,
    MemberRank,
    StatBoosts,
    SINGLE_STAT_SEGMENTS,
    DUAL_STAT_SEGMENTS,
    Stats,
    MemberTemplate,
    MemberInstance,
    Leader,
    Gear,
    GearInstance,
    Tactic,
    TacticInstance,
    DamageTable,
    EventFlavor,
    EventDefinition,
    SegmentDefinition,
    RunState,
    MemberOption,
    GearOption,
    TacticOption,
    DraftOption,
    RunConfig,
)

__all__ = [
    # Enums
    "StatType",
    "GearType",
    "TacticType",
    "SegmentType",
    "EventOutcome",
    "CheckResult",
    "MemberRank",
    "StatBoosts",
    "SINGLE_STAT_SEGMENTS",
    "DUAL_STAT_SEGMENTS",
    # Models
    "Stats",
    "MemberTemplate",
    "MemberInstance",
    "Leader",
    "Gear",
    "GearInstance",
    "Tactic",
    "TacticInstance",
    "DamageTable",
    "EventFlavor",
    "EventDefinition",
    "SegmentDefinition",
    "RunState",
    # Draft
    "MemberOption",
    "GearOption",
    "TacticOption",
    "DraftOption",
    # Catalog
    "RunConfig",
]
