"""
Event resolution.

Compares the fellowship's stats against one event's thresholds. A skip flag
bypasses the check entirely; auto_success tokens force a pass on their stat.
HP is left alone; the segment simulator applies damage.
"""

from dataclasses import dataclass, field

from ..state.schema import (
    CheckResult,
    EventDefinition,
    EventOutcome,
    GearInstance,
    GearType,
    RunState,
    StatType,
    Stats,
)
from ..tools.rng import SeededRNG

AUTO_SUCCESS_MARGIN = 10  # Token value is threshold + this

# Outcome lines carry a fixed marker so transcripts can be tallied
OUTCOME_MARKERS = {
    EventOutcome.SUCCESS: "[SUCCESS]",
    EventOutcome.MITIGATED_FAILURE: "[MITIGATED]",
    EventOutcome.FAILURE: "[FAILURE]",
}
SKIP_MARKER = "[SKIPPED]"


@dataclass
class StatCheck:
    """One stat comparison inside an event."""
    stat: StatType
    value: int
    threshold: int
    result: CheckResult
    auto_success: bool = False


@dataclass
class EventResolution:
    """Result of resolving one event."""
    outcome: EventOutcome
    damage: int
    run_state: RunState
    log: list[str] = field(default_factory=list)
    checks: list[StatCheck] = field(default_factory=list)
    skipped: bool = False


def classify(value: int, threshold: int) -> CheckResult:
    if value > threshold:
        return CheckResult.PASS
    if value == threshold:
        return CheckResult.TIE
    return CheckResult.FAIL


def combine_results(checks: list[StatCheck]) -> EventOutcome:
    """Any fail -> FAILURE, else any tie -> MITIGATED_FAILURE, else SUCCESS."""
    if any(c.result == CheckResult.FAIL for c in checks):
        return EventOutcome.FAILURE
    if any(c.result == CheckResult.TIE for c in checks):
        return EventOutcome.MITIGATED_FAILURE
    return EventOutcome.SUCCESS


def find_auto_success(run_state: RunState, stat: StatType) -> GearInstance | None:
    """First unused auto_success token for a stat."""
    for gear in run_state.gear:
        if gear.type == GearType.AUTO_SUCCESS and gear.stat_type == stat and not gear.used:
            return gear
    return None


def outcome_line(outcome: EventOutcome, damage: int) -> str:
    suffix = f" (-{damage} HP)" if damage > 0 else ""
    return f"  {OUTCOME_MARKERS[outcome]} Result: {outcome.value}{suffix}"


def resolve_event(
    run_state: RunState,
    event: EventDefinition,
    stats: Stats,
    rng: SeededRNG,
) -> EventResolution:
    """
    Resolve a single event.

    Args:
        run_state: Current state (not modified)
        event: The event to check
        stats: Stats for this segment (temporary boosts already applied)
        rng: Run RNG; no draws are taken here, the parameter keeps the
            resolver signature uniform with the rest of the engine

    Returns:
        EventResolution with the outcome, damage and updated state
        (skip flag cleared or tokens marked used)
    """
    state = run_state.model_copy(deep=True)

    if state.skip_next_event:
        state.skip_next_event = False
        return EventResolution(
            outcome=EventOutcome.SUCCESS,
            damage=0,
            run_state=state,
            log=[f"  {SKIP_MARKER} {event.name} (event skipped)"],
            skipped=True,
        )

    log = [f"  {event.name}: {event.description}"]
    checks = []

    for stat in event.check_stats:
        threshold = event.thresholds.get(stat, 0)
        value = stats.get(stat)
        token = find_auto_success(state, stat)

        if token is not None:
            token.used = True
            value = threshold + AUTO_SUCCESS_MARGIN
            log.append(f"    {token.name} activated! Auto-success on {stat.value} check.")

        check = StatCheck(
            stat=stat,
            value=value,
            threshold=threshold,
            result=classify(value, threshold),
            auto_success=token is not None,
        )
        checks.append(check)
        log.append(f"    {stat.value.upper()}: {value} vs {threshold} -> {check.result.value.upper()}")

    outcome = combine_results(checks)
    damage = event.damage.for_outcome(outcome)
    log.append(outcome_line(outcome, damage))

    return EventResolution(
        outcome=outcome,
        damage=damage,
        run_state=state,
        log=log,
        checks=checks,
    )


def count_outcomes(lines: list[str]) -> dict[EventOutcome, int]:
    """Tally outcome lines in a transcript. Skipped events are not counted."""
    counts = {outcome: 0 for outcome in EventOutcome}
    for line in lines:
        stripped = line.lstrip()
        for outcome, marker in OUTCOME_MARKERS.items():
            if stripped.startswith(marker):
                counts[outcome] += 1
    return counts
