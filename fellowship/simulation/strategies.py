"""
Bot draft strategies.

Each strategy picks among already-computed draft options; none of them
touch engine state. Return 1..3 to take an option, 0 to skip.
"""

from typing import Callable, Protocol, Sequence

from ..state.schema import (
    DraftOption,
    GearOption,
    GearType,
    MemberOption,
    RunState,
    StatType,
    TacticOption,
    TacticType,
)
from ..tools.rng import SeededRNG


class BotStrategy(Protocol):
    def choose_draft(
        self,
        run_state: RunState,
        options: Sequence[DraftOption],
        segment_index: int,
    ) -> int:
        ...


# -----------------------------------------------------------------------------
# Option lookups (1-based index, 0 when absent)
# -----------------------------------------------------------------------------

def find_option(options: Sequence[DraftOption], kind: type, predicate=None) -> int:
    for i, option in enumerate(options, 1):
        if isinstance(option, kind) and (predicate is None or predicate(option)):
            return i
    return 0


def find_gear(options: Sequence[DraftOption], gear_type: GearType) -> int:
    return find_option(options, GearOption, lambda o: o.payload.type == gear_type)


def find_tactic(options: Sequence[DraftOption], tactic_type: TacticType) -> int:
    return find_option(options, TacticOption, lambda o: o.payload.type == tactic_type)


def hp_ratio(run_state: RunState) -> float:
    return run_state.hp / run_state.max_hp if run_state.max_hp else 0.0


def has_open_slot(run_state: RunState) -> bool:
    return len(run_state.members) < run_state.member_slots


def first_of(*indices: int, default: int = 1) -> int:
    for index in indices:
        if index:
            return index
    return default


# -----------------------------------------------------------------------------
# Strategies
# -----------------------------------------------------------------------------

class MemberFocusStrategy:
    """Recruit while slots are open, otherwise gear."""

    def choose_draft(self, run_state, options, segment_index):
        member = find_option(options, MemberOption)
        if member and has_open_slot(run_state):
            return member
        return first_of(find_option(options, GearOption))


class GearFocusStrategy:
    def choose_draft(self, run_state, options, segment_index):
        return first_of(find_option(options, GearOption))


class TacticFocusStrategy:
    def choose_draft(self, run_state, options, segment_index):
        return first_of(find_option(options, TacticOption))


class RandomStrategy:
    """
    Uniform pick, from its own seeded stream.

    With an explicit seed the stream is fixed. Without one it is derived
    from each run's seed on the first draft of that run, so every run in a
    batch gets a different but reproducible sequence.
    """

    def __init__(self, seed: str | int | None = None):
        self.seed = seed
        self.rng = SeededRNG(seed) if seed is not None else None
        self._run_seed: str | None = None

    def choose_draft(self, run_state, options, segment_index):
        if self.seed is None and run_state.rng_seed != self._run_seed:
            self._run_seed = run_state.rng_seed
            self.rng = SeededRNG(f"{run_state.rng_seed}_strategy")
        return self.rng.next_int(1, len(options))


class SmartStrategy:
    """Heal when low, recruit while there is room, then slots, then tactics."""

    def choose_draft(self, run_state, options, segment_index):
        if hp_ratio(run_state) < 0.4:
            heal = find_gear(options, GearType.HEAL)
            if heal:
                return heal

        if has_open_slot(run_state):
            member = find_option(options, MemberOption)
            if member:
                return member

        return first_of(
            find_gear(options, GearType.EXTRA_SLOT),
            find_option(options, TacticOption),
        )


class BalancedStrategy:
    """Rotate member / gear / tactic by segment."""

    def choose_draft(self, run_state, options, segment_index):
        rotation = segment_index % 3
        if rotation == 0 and has_open_slot(run_state):
            return find_option(options, MemberOption)
        if rotation == 1:
            return find_option(options, GearOption)
        return find_option(options, TacticOption)


class WorstCaseStrategy:
    """Skip every draft. Baseline for minimum viable progression."""

    def choose_draft(self, run_state, options, segment_index):
        return 0


class UpgradeHeavyStrategy:
    """Always members: recruits first, level-ups once slots are full."""

    def choose_draft(self, run_state, options, segment_index):
        return first_of(
            find_option(options, MemberOption),
            find_option(options, TacticOption),
        )


class LeaderSynergyStrategy:
    """Lean on the leader's themed tactics once a core fellowship exists."""

    def choose_draft(self, run_state, options, segment_index):
        if hp_ratio(run_state) < 0.3:
            heal = find_gear(options, GearType.HEAL)
            if heal:
                return heal

        tactic = find_option(options, TacticOption)
        if run_state.leader.tactics_pool_id is not None and len(run_state.members) >= 2 and tactic:
            return tactic

        if has_open_slot(run_state):
            member = find_option(options, MemberOption)
            if member:
                return member

        return first_of(tactic)


class AutoSuccessStrategy:
    """Stockpile auto_success tokens."""

    def choose_draft(self, run_state, options, segment_index):
        token = find_gear(options, GearType.AUTO_SUCCESS)
        if token:
            return token

        if hp_ratio(run_state) < 0.5:
            heal = find_gear(options, GearType.HEAL)
            if heal:
                return heal

        if has_open_slot(run_state):
            member = find_option(options, MemberOption)
            if member:
                return member

        return first_of(find_option(options, GearOption))


def weakest_stat(run_state: RunState) -> StatType:
    """Lowest current stat; ties go to the earlier stat."""
    values = run_state.stats.as_dict()
    return min(StatType, key=lambda stat: values[stat])


class AdaptiveStatStrategy:
    """Shore up the weakest stat."""

    def choose_draft(self, run_state, options, segment_index):
        if hp_ratio(run_state) < 0.4:
            heal = find_gear(options, GearType.HEAL)
            if heal:
                return heal

        weakest = weakest_stat(run_state)

        if has_open_slot(run_state):
            member = find_option(options, MemberOption, lambda o: weakest in o.payload.primary_stats)
            if member:
                return member

        tactic = find_option(options, TacticOption, lambda o: o.payload.stat_type == weakest)
        if tactic:
            return tactic

        if has_open_slot(run_state):
            member = find_option(options, MemberOption)
            if member:
                return member

        return first_of(find_option(options, TacticOption))


class SoloLeaderStrategy:
    """Never recruit; permanent boosts land on the leader."""

    def choose_draft(self, run_state, options, segment_index):
        if hp_ratio(run_state) < 0.5:
            heal = find_gear(options, GearType.HEAL)
            if heal:
                return heal

        return first_of(
            find_tactic(options, TacticType.PERMANENT_BOOST),
            find_gear(options, GearType.AUTO_SUCCESS),
            find_option(options, TacticOption),
            find_option(options, GearOption),
            default=0,
        )


StrategyFactory = Callable[[], BotStrategy]

STRATEGIES: dict[str, StrategyFactory] = {
    "member_focus": MemberFocusStrategy,
    "gear_focus": GearFocusStrategy,
    "tactic_focus": TacticFocusStrategy,
    "random": RandomStrategy,
    "smart": SmartStrategy,
    "balanced": BalancedStrategy,
    "upgrade_heavy": UpgradeHeavyStrategy,
    "leader_synergy": LeaderSynergyStrategy,
    "auto_success": AutoSuccessStrategy,
    "adaptive_stat": AdaptiveStatStrategy,
    "solo_leader": SoloLeaderStrategy,
    "worst_case": WorstCaseStrategy,
}


def get_strategy(name: str) -> BotStrategy:
    """Instantiate a strategy by name. Raises KeyError for unknown names."""
    if name not in STRATEGIES:
        raise KeyError(f"Unknown strategy: {name} (valid: {', '.join(STRATEGIES)})")
    return STRATEGIES[name]()
