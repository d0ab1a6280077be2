"""
Segment and event generation.

Builds the ten-segment curriculum for a run from a single RNG. Draw order is
fixed: for each segment, one float for single/dual, one pick for the segment
type, then per event an optional check-type pick (dual segments) and a
flavor pick.
"""

from ..state.schema import (
    DUAL_STAT_SEGMENTS,
    SINGLE_STAT_SEGMENTS,
    DamageTable,
    EventDefinition,
    EventFlavor,
    SegmentDefinition,
    StatType,
)
from ..tools.rng import SeededRNG

SEGMENT_COUNT = 10
EVENTS_PER_SEGMENT = 3
BASE_THRESHOLD = 3  # First event of a segment; +1 per later event

# Chance that a segment is single-stat, by (last index of tier, chance)
SINGLE_STAT_CHANCE = [
    (4, 0.8),   # Early: mostly single stat
    (7, 0.5),   # Mid: even split
    (10, 0.2),  # Late: mostly dual stat
]


def single_stat_chance(segment_index: int) -> float:
    for last_index, chance in SINGLE_STAT_CHANCE:
        if segment_index <= last_index:
            return chance
    return SINGLE_STAT_CHANCE[-1][1]


def scaled_threshold(base_threshold: int, segment_index: int) -> int:
    """base + floor(index * 0.5)"""
    return base_threshold + segment_index // 2


def damage_table(segment_index: int) -> DamageTable:
    """success 0, mitigated 3 + floor(index * 0.4), failure 7 + index"""
    return DamageTable(
        success=0,
        mitigated=3 + (segment_index * 2) // 5,
        failure=7 + segment_index,
    )


def create_event(
    event_id: str,
    flavor: EventFlavor,
    check_type: str,
    base_threshold: int,
    segment_index: int,
) -> EventDefinition:
    """Build one event; every stat in the check shares the same threshold."""
    threshold = scaled_threshold(base_threshold, segment_index)
    stats = [StatType(part) for part in check_type.split("+")]

    return EventDefinition(
        id=event_id,
        name=flavor.name,
        description=flavor.description,
        check_type=check_type,
        thresholds={stat: threshold for stat in stats},
        damage=damage_table(segment_index),
    )


def generate_segments(
    rng: SeededRNG,
    event_flavors: dict[StatType, list[EventFlavor]],
) -> list[SegmentDefinition]:
    """
    Generate the randomized segments for a run.

    Args:
        rng: Run RNG, consumed in strict sequence
        event_flavors: Per-stat name/description pool

    Returns:
        Exactly SEGMENT_COUNT segments, indexed 1..SEGMENT_COUNT

    Raises:
        EmptyInputError: a stat needed for flavor has no entries
    """
    segments = []

    for i in range(1, SEGMENT_COUNT + 1):
        if rng.next_float() < single_stat_chance(i):
            segment_type = rng.pick(SINGLE_STAT_SEGMENTS)
        else:
            segment_type = rng.pick(DUAL_STAT_SEGMENTS)

        stats = segment_type.stats
        events = []

        for e in range(EVENTS_PER_SEGMENT):
            if len(stats) == 2:
                check_options = [
                    stats[0].value,
                    stats[1].value,
                    f"{stats[0].value}+{stats[1].value}",
                ]
                check_type = rng.pick(check_options)
                # Combined checks take their flavor from the first stat
                flavor_stat = stats[0] if "+" in check_type else StatType(check_type)
            else:
                check_type = stats[0].value
                flavor_stat = stats[0]

            flavor = rng.pick(event_flavors.get(flavor_stat, []))
            events.append(create_event(
                f"seg{i}_event{e + 1}",
                flavor,
                check_type,
                BASE_THRESHOLD + e,
                i,
            ))

        segments.append(SegmentDefinition(index=i, type=segment_type, events=events))

    return segments
