"""
Run lifecycle: creation, termination, scoring.

A run is fully described by (leader_id, seed); everything after creation is
a deterministic fold over RNG draws and the caller's draft choices.
"""

import logging

from ..errors import LeaderNotFoundError
from ..state.schema import RunConfig, RunState
from ..tools.rng import create_rng
from .draft import new_member
from .generator import SEGMENT_COUNT, generate_segments
from .stats import compute_stats, get_member_all_stats

logger = logging.getLogger(__name__)

VICTORY_BONUS = 500
SEGMENT_POINTS = 100
HP_POINTS = 2
LEVEL_POINTS = 5


def create_run(catalog: RunConfig, leader_id: str, seed: str | int) -> RunState:
    """
    Create a new run.

    Draw order on the run RNG: starting member ids, then segment generation.

    Raises:
        LeaderNotFoundError: leader_id is not in the catalog
        EmptyInputError: the catalog lacks event flavors for a drawn stat
    """
    leader = catalog.get_leader(leader_id)
    if leader is None:
        raise LeaderNotFoundError(leader_id)

    rng = create_rng(seed)

    members = []
    for template_id in catalog.starting_member_ids:
        template = catalog.get_member_template(template_id)
        if template is not None:
            members.append(new_member(template, rng, members))

    max_hp = catalog.base_hp + leader.bonus_hp
    segments = generate_segments(rng, catalog.event_flavors)

    state = RunState(
        leader_id=leader.id,
        leader=leader.model_copy(deep=True),
        hp=max_hp,
        max_hp=max_hp,
        members=members,
        member_slots=leader.base_member_slots,
        segment_index=1,
        segments=segments,
        rng_seed=str(seed),
    )
    state.stats = compute_stats(state, catalog)

    logger.debug("Created run: leader=%s seed=%s hp=%d", leader.id, seed, max_hp)
    return state


def is_run_over(run_state: RunState) -> bool:
    """Dead, or past the last segment."""
    return run_state.hp <= 0 or run_state.segment_index > SEGMENT_COUNT


def score_run(run_state: RunState, catalog: RunConfig | None = None) -> int:
    """
    100 per segment cleared + 2 per HP + stat total + 5 per member level,
    plus 500 for surviving all segments.
    """
    segment_score = (run_state.segment_index - 1) * SEGMENT_POINTS
    hp_score = run_state.hp * HP_POINTS
    stats_score = run_state.stats.total()
    member_score = sum(m.level for m in run_state.members) * LEVEL_POINTS
    victory = VICTORY_BONUS if run_state.hp > 0 and run_state.segment_index > SEGMENT_COUNT else 0

    return segment_score + hp_score + stats_score + member_score + victory


def get_run_summary(run_state: RunState) -> str:
    """Plain-text fellowship status."""
    rule = "=" * 50
    stats = run_state.stats
    lines = [
        "",
        rule,
        "FELLOWSHIP STATUS",
        rule,
        f"Leader: {run_state.leader.name}",
        f"HP: {run_state.hp}/{run_state.max_hp}",
        f"Segment: {min(run_state.segment_index, SEGMENT_COUNT)}/{SEGMENT_COUNT}",
        "",
        "Stats:",
        f"   Combat: {stats.combat}",
        f"   Survival: {stats.survival}",
        f"   Social: {stats.social}",
        f"   Chaos: {stats.chaos}",
        "",
        f"Members ({len(run_state.members)}/{run_state.member_slots}):",
    ]

    for member in run_state.members:
        contributions = get_member_all_stats(member, run_state.permanent_boosts)
        display = ", ".join(
            f"{stat.value} +{value}" for stat, value in contributions.items() if value > 0
        )
        lines.append(f"   {member.name} Lv{member.level} ({display}) +{member.scaling}/lv")

    active = run_state.active_gear
    if active:
        lines.append("")
        lines.append("Gear:")
        for gear in active:
            lines.append(f"   {gear.name}")

    return "\n".join(lines)
