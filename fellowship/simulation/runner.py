"""Bot runs and seeded batches."""

import logging
from dataclasses import dataclass, field

from ..state.schema import EventOutcome, MemberInstance, RunConfig, Stats, StatType
from ..systems.draft import apply_draft_choice, get_draft_options
from ..systems.generator import SEGMENT_COUNT
from ..systems.lifecycle import create_run, score_run
from ..systems.segments import simulate_segment
from ..tools.rng import create_rng
from .strategies import BotStrategy, StrategyFactory

logger = logging.getLogger(__name__)

INITIAL_DRAFTS = 3


@dataclass
class BotRunSummary:
    """Result of one bot-driven run."""

    leader_id: str
    seed: str
    success: bool
    segment_reached: int
    final_hp: int
    final_stats: Stats
    final_members: list[MemberInstance] = field(default_factory=list)
    score: int = 0
    successes: int = 0
    mitigated: int = 0
    failures: int = 0
    drafts_taken: int = 0
    drafts_skipped: int = 0

    @property
    def events_resolved(self) -> int:
        return self.successes + self.mitigated + self.failures


@dataclass
class BatchResult:
    """Aggregate over a batch of bot runs."""

    leader_id: str
    strategy: str
    runs: list[BotRunSummary] = field(default_factory=list)

    @property
    def wins(self) -> int:
        return sum(1 for r in self.runs if r.success)

    @property
    def win_rate(self) -> float:
        return self.wins / len(self.runs) if self.runs else 0.0

    @property
    def avg_score(self) -> float:
        return self._mean(r.score for r in self.runs)

    @property
    def avg_segment_reached(self) -> float:
        return self._mean(r.segment_reached for r in self.runs)

    @property
    def avg_final_hp(self) -> float:
        return self._mean(r.final_hp for r in self.runs)

    @property
    def avg_stats(self) -> dict[StatType, float]:
        return {
            stat: self._mean(r.final_stats.get(stat) for r in self.runs)
            for stat in StatType
        }

    def _mean(self, values) -> float:
        values = list(values)
        return sum(values) / len(values) if values else 0.0


def _draft(state, catalog, rng, strategy: BotStrategy, segment_index: int, summary: BotRunSummary):
    options = get_draft_options(state, catalog, rng)
    choice = strategy.choose_draft(state, options, segment_index)
    if 1 <= choice <= len(options):
        summary.drafts_taken += 1
    else:
        summary.drafts_skipped += 1
    return apply_draft_choice(state, choice, options, rng)


def run_bot(
    catalog: RunConfig,
    leader_id: str,
    strategy: BotStrategy,
    seed: str | int,
    initial_drafts: int = INITIAL_DRAFTS,
) -> BotRunSummary:
    """
    Play one full run with a bot choosing every draft.

    The run is created from the seed, then a second RNG built from the same
    seed drives drafts and segments. Initial drafts happen before segment 1
    and the strategy sees segment_index 0 for them.

    Raises:
        LeaderNotFoundError: leader_id is not in the catalog
    """
    state = create_run(catalog, leader_id, seed)
    rng = create_rng(seed)

    summary = BotRunSummary(
        leader_id=leader_id,
        seed=str(seed),
        success=False,
        segment_reached=1,
        final_hp=state.hp,
        final_stats=state.stats,
    )

    for _ in range(initial_drafts):
        state = _draft(state, catalog, rng, strategy, 0, summary)

    while state.hp > 0 and state.segment_index <= SEGMENT_COUNT:
        result = simulate_segment(state, catalog, rng)
        state = result.run_state

        summary.successes += result.outcomes.count(EventOutcome.SUCCESS)
        summary.mitigated += result.outcomes.count(EventOutcome.MITIGATED_FAILURE)
        summary.failures += result.outcomes.count(EventOutcome.FAILURE)

        if state.hp <= 0:
            break

        if state.segment_index <= SEGMENT_COUNT:
            state = _draft(state, catalog, rng, strategy, state.segment_index, summary)

    summary.success = state.victorious
    summary.segment_reached = min(state.segment_index, SEGMENT_COUNT)
    summary.final_hp = state.hp
    summary.final_stats = state.stats
    summary.final_members = state.members
    summary.score = score_run(state, catalog)

    logger.debug(
        "Bot run %s/%s: success=%s segment=%d score=%d",
        leader_id, seed, summary.success, summary.segment_reached, summary.score,
    )
    return summary


def run_bot_batch(
    catalog: RunConfig,
    leader_id: str,
    strategy_factory: StrategyFactory,
    num_runs: int,
    base_seed: str = "batch",
    strategy_name: str | None = None,
) -> BatchResult:
    """
    Run num_runs bot games sequentially with seeds '{base_seed}_{i}'.

    A fresh strategy comes from the factory for each run so stateful
    strategies never leak between runs.
    """
    if num_runs <= 0:
        raise ValueError(f"num_runs must be positive, got {num_runs}")

    name = strategy_name or getattr(strategy_factory, "__name__", "strategy")
    batch = BatchResult(leader_id=leader_id, strategy=name)

    for i in range(num_runs):
        batch.runs.append(run_bot(catalog, leader_id, strategy_factory(), f"{base_seed}_{i}"))

    logger.debug(
        "Batch %s/%s: %d runs, win rate %.2f",
        leader_id, name, num_runs, batch.win_rate,
    )
    return batch
