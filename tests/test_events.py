"""
Tests for event resolution.

pass / tie / fail classification, combined checks, auto-success tokens and
the skip flag.
"""

import pytest

from fellowship.state.schema import EventOutcome, GearInstance, GearType, StatType, Stats
from fellowship.systems.events import (
    AUTO_SUCCESS_MARGIN,
    count_outcomes,
    resolve_event,
)
from fellowship.tools.rng import create_rng


def token(stat, instance_id="g1", used=False):
    return GearInstance(
        id=f"auto_{stat.value}",
        type=GearType.AUTO_SUCCESS,
        name=f"{stat.value.title()} Token",
        value=1,
        stat_type=stat,
        instance_id=instance_id,
        used=used,
    )


@pytest.fixture
def state(make_state):
    return make_state()


class TestSingleChecks:
    """One-stat events."""

    def test_pass(self, state, make_event, rng):
        result = resolve_event(state, make_event("combat", 5), Stats(combat=6), rng)
        assert result.outcome == EventOutcome.SUCCESS
        assert result.damage == 0

    def test_tie_is_mitigated(self, state, make_event, rng):
        result = resolve_event(state, make_event("combat", 5), Stats(combat=5), rng)
        assert result.outcome == EventOutcome.MITIGATED_FAILURE
        assert result.damage == 3

    def test_fail(self, state, make_event, rng):
        result = resolve_event(state, make_event("combat", 5), Stats(combat=4), rng)
        assert result.outcome == EventOutcome.FAILURE
        assert result.damage == 8

    def test_hp_untouched(self, state, make_event, rng):
        """The resolver reports damage; it doesn't apply it."""
        result = resolve_event(state, make_event("combat", 5), Stats(), rng)
        assert result.run_state.hp == state.hp

    def test_no_rng_draws(self, state, make_event):
        rng = create_rng("quiet")
        before = rng.state
        resolve_event(state, make_event("combat", 5), Stats(combat=1), rng)
        assert rng.state == before


class TestCombinedChecks:
    """Both stats must pass."""

    def test_both_pass(self, state, make_event, rng):
        event = make_event("combat+social", 5)
        result = resolve_event(state, event, Stats(combat=6, social=9), rng)
        assert result.outcome == EventOutcome.SUCCESS
        assert len(result.checks) == 2

    def test_pass_and_tie(self, state, make_event, rng):
        event = make_event("combat+social", 5)
        result = resolve_event(state, event, Stats(combat=6, social=5), rng)
        assert result.outcome == EventOutcome.MITIGATED_FAILURE

    def test_any_fail_fails(self, state, make_event, rng):
        """A fail beats a tie."""
        event = make_event("combat+social", 5)
        result = resolve_event(state, event, Stats(combat=5, social=2), rng)
        assert result.outcome == EventOutcome.FAILURE


class TestAutoSuccess:
    """Stored tokens force a pass."""

    def test_token_forces_pass(self, make_state, make_event, rng):
        state = make_state(gear=[token(StatType.COMBAT)])
        result = resolve_event(state, make_event("combat", 5), Stats(), rng)
        assert result.outcome == EventOutcome.SUCCESS
        assert result.checks[0].value == 5 + AUTO_SUCCESS_MARGIN
        assert result.checks[0].auto_success

    def test_token_consumed_in_new_state_only(self, make_state, make_event, rng):
        state = make_state(gear=[token(StatType.COMBAT)])
        result = resolve_event(state, make_event("combat", 5), Stats(), rng)
        assert result.run_state.gear[0].used
        assert not state.gear[0].used

    def test_one_token_per_stat(self, make_state, make_event, rng):
        """Only the first unused token for the stat is spent."""
        state = make_state(gear=[token(StatType.COMBAT, "g1"), token(StatType.COMBAT, "g2")])
        result = resolve_event(state, make_event("combat", 5), Stats(), rng)
        assert [g.used for g in result.run_state.gear] == [True, False]

    def test_used_token_ignored(self, make_state, make_event, rng):
        state = make_state(gear=[token(StatType.COMBAT, used=True)])
        result = resolve_event(state, make_event("combat", 5), Stats(), rng)
        assert result.outcome == EventOutcome.FAILURE

    def test_token_for_other_stat_ignored(self, make_state, make_event, rng):
        state = make_state(gear=[token(StatType.CHAOS)])
        result = resolve_event(state, make_event("combat", 5), Stats(), rng)
        assert result.outcome == EventOutcome.FAILURE
        assert not result.run_state.gear[0].used

    def test_tokens_cover_both_sides_of_combined(self, make_state, make_event, rng):
        state = make_state(gear=[token(StatType.COMBAT, "g1"), token(StatType.SOCIAL, "g2")])
        result = resolve_event(state, make_event("combat+social", 5), Stats(), rng)
        assert result.outcome == EventOutcome.SUCCESS
        assert all(g.used for g in result.run_state.gear)


class TestSkip:
    """The skip flag bypasses the check."""

    def test_skip_is_free_success(self, make_state, make_event):
        rng = create_rng("skip")
        before = rng.state
        state = make_state(skip_next_event=True)
        result = resolve_event(state, make_event("combat", 50), Stats(), rng)

        assert result.outcome == EventOutcome.SUCCESS
        assert result.damage == 0
        assert result.skipped
        assert rng.state == before

    def test_skip_flag_consumed(self, make_state, make_event, rng):
        state = make_state(skip_next_event=True)
        result = resolve_event(state, make_event("combat", 50), Stats(), rng)
        assert not result.run_state.skip_next_event
        assert state.skip_next_event

    def test_skip_keeps_tokens(self, make_state, make_event, rng):
        state = make_state(skip_next_event=True, gear=[token(StatType.COMBAT)])
        result = resolve_event(state, make_event("combat", 5), Stats(), rng)
        assert not result.run_state.gear[0].used

    def test_skip_log_marker(self, make_state, make_event, rng):
        state = make_state(skip_next_event=True)
        result = resolve_event(state, make_event("combat", 5), Stats(), rng)
        assert result.log[0].strip().startswith("[SKIPPED]")


class TestOutcomeLines:
    """Transcript markers are distinct per outcome."""

    def test_count_outcomes(self, state, make_event, rng):
        lines = []
        for combat in (6, 6, 5, 1):
            lines.extend(resolve_event(state, make_event("combat", 5), Stats(combat=combat), rng).log)
        counts = count_outcomes(lines)
        assert counts[EventOutcome.SUCCESS] == 2
        assert counts[EventOutcome.MITIGATED_FAILURE] == 1
        assert counts[EventOutcome.FAILURE] == 1

    def test_skips_not_counted(self):
        counts = count_outcomes(["  [SKIPPED] Ambush! (event skipped)"])
        assert sum(counts.values()) == 0

    def test_damage_in_outcome_line(self, state, make_event, rng):
        result = resolve_event(state, make_event("combat", 5), Stats(combat=1), rng)
        assert result.log[-1] == "  [FAILURE] Result: FAILURE (-8 HP)"
