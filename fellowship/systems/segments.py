"""
Segment simulation.

Runs the three events of the current segment in order:
    stats (with temporary boosts) -> event 1..3 -> level-up check
    -> expire next-segment tactics -> advance index

HP is floored at zero after every event; reaching zero ends the segment
(and the run) immediately, with no level-up, expiry or advance.
"""

import logging
from dataclasses import dataclass, field

from ..errors import SegmentNotFoundError
from ..state.schema import EventOutcome, RunConfig, RunState
from ..tools.rng import SeededRNG
from .events import resolve_event
from .stats import compute_stats, get_member_all_stats, get_temporary_boosts

logger = logging.getLogger(__name__)

LEVEL_UP_SUCCESSES = 2
RULE = "=" * 50
THIN_RULE = "-" * 50


@dataclass
class SegmentResult:
    """Outcome of one simulated segment."""
    run_state: RunState
    segment_log: list[str] = field(default_factory=list)
    outcomes: list[EventOutcome] = field(default_factory=list)  # Skips count as SUCCESS

    @property
    def successes(self) -> int:
        return self.outcomes.count(EventOutcome.SUCCESS)

    @property
    def mitigated(self) -> int:
        return self.outcomes.count(EventOutcome.MITIGATED_FAILURE)

    @property
    def failures(self) -> int:
        return self.outcomes.count(EventOutcome.FAILURE)


def _level_up_lines(before: RunState, after: RunState) -> list[str]:
    """Per-member level and stat gain lines."""
    old_members = {m.id: m for m in before.members}
    lines = []
    for member in after.members:
        old = old_members[member.id]
        old_stats = get_member_all_stats(old, before.permanent_boosts)
        new_stats = get_member_all_stats(member, after.permanent_boosts)

        display = []
        for stat in member.primary_stats:
            gain = new_stats.get(stat, 0) - old_stats.get(stat, 0)
            display.append(f"{stat.value} {new_stats.get(stat, 0)} (+{gain})")
        for stat, value in new_stats.items():
            if stat not in member.primary_stats and value > 0:
                display.append(f"{stat.value} {value}")

        lines.append(
            f"   {member.name}: Lv{old.level} -> Lv{member.level} | "
            f"{', '.join(display)} | +{member.scaling}/lv"
        )
    return lines


def simulate_segment(
    run_state: RunState,
    catalog: RunConfig,
    rng: SeededRNG,
) -> SegmentResult:
    """
    Simulate the current segment.

    Returns:
        SegmentResult with the new state, the transcript for this segment,
        and the outcome of every event that was resolved

    Raises:
        SegmentNotFoundError: no segment matches run_state.segment_index
    """
    segment = run_state.current_segment
    if segment is None:
        raise SegmentNotFoundError(run_state.segment_index)

    state = run_state.model_copy(deep=True)
    log = [
        "",
        RULE,
        f"SEGMENT {segment.index}: {segment.type.value}",
        RULE,
    ]

    temp_boosts = get_temporary_boosts(state)
    stats = compute_stats(state, catalog, temp_boosts)
    state.stats = stats

    log.append(
        f"Fellowship Stats: Combat {stats.combat} | Survival {stats.survival} | "
        f"Social {stats.social} | Chaos {stats.chaos}"
    )
    log.append(f"HP: {state.hp}/{state.max_hp}")
    if temp_boosts:
        boost_str = ", ".join(f"{stat.value}+{value}%" for stat, value in temp_boosts.items())
        log.append(f"Active Boosts: {boost_str}")
    log.append("")

    outcomes: list[EventOutcome] = []
    total_damage = 0

    for i, event in enumerate(segment.events):
        log.append(f"Event {i + 1}/{len(segment.events)}:")

        resolution = resolve_event(state, event, stats, rng)
        log.extend(resolution.log)
        state = resolution.run_state

        total_damage += resolution.damage
        state.hp = max(0, state.hp - resolution.damage)
        outcomes.append(resolution.outcome)

        if state.hp <= 0:
            log.append("")
            log.append("THE FELLOWSHIP HAS FALLEN!")
            state.event_log.extend(log)
            logger.debug("Run fell in segment %d after event %d", segment.index, i + 1)
            return SegmentResult(run_state=state, segment_log=log, outcomes=outcomes)

    successes = outcomes.count(EventOutcome.SUCCESS)
    mitigated = outcomes.count(EventOutcome.MITIGATED_FAILURE)
    failures = outcomes.count(EventOutcome.FAILURE)

    log.append(THIN_RULE)
    log.append(f"Segment Summary: {successes} Success | {mitigated} Mitigated | {failures} Failures")
    log.append(f"Damage Taken: {total_damage} HP")
    log.append(f"HP remaining: {state.hp}/{state.max_hp}")

    if successes >= LEVEL_UP_SUCCESSES:
        before = state.model_copy(deep=True)
        for member in state.members:
            member.level += 1
        log.append(f"All members leveled up! ({successes}/{len(segment.events)} successes)")
        log.extend(_level_up_lines(before, state))
    else:
        log.append(
            f"Members did NOT level up (need {LEVEL_UP_SUCCESSES}+ successes, got {successes})"
        )

    # Expire this segment's boosts whether or not they were read
    for tactic in state.tactics:
        if tactic.expires_after_segment == state.segment_index:
            tactic.used = True

    state.segment_index += 1
    state.event_log.extend(log)

    logger.debug(
        "Segment %d: %d success, %d mitigated, %d failed, %d damage, hp=%d",
        segment.index, successes, mitigated, failures, total_damage, state.hp,
    )
    return SegmentResult(run_state=state, segment_log=log, outcomes=outcomes)
