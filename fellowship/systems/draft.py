"""
Draft phase: offer three rewards, apply the chosen one.

Offers are always [member, gear, tactic] in that order. Choice indices are
1-based; 0 or anything out of range means the player skipped the draft.
"""

import logging
import math
from typing import Sequence

from ..state.schema import (
    DraftOption,
    Gear,
    GearInstance,
    GearOption,
    GearType,
    MemberInstance,
    MemberOption,
    MemberTemplate,
    RunConfig,
    RunState,
    Tactic,
    TacticInstance,
    TacticOption,
    TacticType,
)
from ..tools.rng import SeededRNG
from .stats import compute_stats

logger = logging.getLogger(__name__)

# (last segment index of tier, member rank offered)
RANK_TIERS = [
    (3, 1),
    (6, 2),
]
TOP_RANK = 3


def generate_id(prefix: str, rng: SeededRNG) -> str:
    """Instance id drawn from the run RNG: '{prefix}_{0..999999}'."""
    return f"{prefix}_{math.floor(rng.next_float() * 1_000_000)}"


def rank_for_segment(segment_index: int) -> int:
    for last_index, rank in RANK_TIERS:
        if segment_index <= last_index:
            return rank
    return TOP_RANK


def new_member(
    template: MemberTemplate,
    rng: SeededRNG,
    existing: Sequence[MemberInstance] = (),
) -> MemberInstance:
    """Level-1 instance of a template. One RNG draw for the id."""
    member_id = generate_id("member", rng)
    taken = {m.id for m in existing}
    if member_id in taken:
        member_id = f"{member_id}_{len(existing)}"
    return MemberInstance(
        id=member_id,
        template_id=template.id,
        name=template.name,
        primary_stats=list(template.primary_stats),
        rank=template.rank,
        base_value=template.base_value,
        scaling=template.scaling,
        level=1,
    )


# ─── Offers ──────────────────────────────────────────────────

def describe_member(template: MemberTemplate) -> str:
    stats = "/".join(s.value for s in template.primary_stats)
    return (
        f"Recruit {template.name} ({stats}, Rank {template.rank}, "
        f"+{template.scaling}/lv): {template.description}"
    )


def get_draft_options(
    run_state: RunState,
    catalog: RunConfig,
    rng: SeededRNG,
) -> list[DraftOption]:
    """
    Three offers: a member of the tier's rank, any gear, and a tactic from
    the leader's pool plus the generic tactics.

    Raises:
        EmptyInputError: the catalog has nothing to offer for a slot
    """
    rank = rank_for_segment(run_state.segment_index)
    member_template = rng.pick(catalog.templates_of_rank(rank))
    gear = rng.pick(catalog.gear_templates)
    tactic = rng.pick(catalog.tactics_for_leader(run_state.leader))

    return [
        MemberOption(description=describe_member(member_template), payload=member_template),
        GearOption(description=f"{gear.name}: {gear.description}", payload=gear),
        TacticOption(description=f"{tactic.name}: {tactic.description}", payload=tactic),
    ]


# ─── Application ─────────────────────────────────────────────

def _apply_member(state: RunState, template: MemberTemplate, rng: SeededRNG) -> None:
    if len(state.members) < state.member_slots:
        member = new_member(template, rng, state.members)
        state.members.append(member)
        state.event_log.append(f"Recruited {member.name}!")
        return

    # Slots full: train an existing member instead
    matches = [
        m for m in state.members
        if any(stat in template.primary_stats for stat in m.primary_stats)
    ]
    target = rng.pick(matches) if matches else rng.pick(state.members)
    target.level += 1
    state.event_log.append(
        f"{target.name} trained with {template.name}! Now Level {target.level}"
    )


def _apply_gear(state: RunState, gear: Gear, rng: SeededRNG) -> None:
    if gear.type == GearType.EXTRA_SLOT:
        state.member_slots += 1
        state.event_log.append(f"Gained {gear.name}! Member slots: {state.member_slots}")
    elif gear.type == GearType.HEAL:
        old_hp = state.hp
        state.hp = min(state.max_hp, state.hp + gear.value)
        state.event_log.append(f"Used {gear.name}! HP: {old_hp} -> {state.hp}")
    elif gear.type == GearType.AUTO_SUCCESS:
        instance = GearInstance(
            **gear.model_dump(),
            instance_id=generate_id("gear", rng),
            used=False,
        )
        state.gear.append(instance)
        state.event_log.append(f"Acquired {gear.name}!")


def _apply_permanent_boost(state: RunState, tactic: Tactic, rng: SeededRNG) -> None:
    stat = tactic.stat_type
    if stat is None:
        return

    if not state.members:
        # Leader trains in place of an empty fellowship
        state.leader.base_stats[stat] = state.leader.base_stats.get(stat, 0) + tactic.value
        state.event_log.append(f"{state.leader.name} trained in {stat.value}! (+{tactic.value})")
        return

    # An explicit target skips the draw; an absent member falls back to picking
    target = next((m for m in state.members if m.id == tactic.target_member_id), None)
    if target is None:
        primary_matches = [m for m in state.members if m.is_primary(stat)]
        target = rng.pick(primary_matches) if primary_matches else rng.pick(state.members)

    is_primary = target.is_primary(stat)
    amount = tactic.value if is_primary else tactic.value // 2

    boosts = state.permanent_boosts.setdefault(target.id, {})
    boosts[stat] = boosts.get(stat, 0) + amount

    label = "" if is_primary else " (secondary: half effect)"
    state.event_log.append(f"{target.name} gained +{amount} {stat.value}{label}!")


def _apply_tactic(state: RunState, tactic: Tactic, rng: SeededRNG) -> None:
    if tactic.type == TacticType.PERMANENT_BOOST:
        _apply_permanent_boost(state, tactic, rng)
    elif tactic.type == TacticType.NEXT_SEGMENT_BOOST:
        instance = TacticInstance(
            **tactic.model_dump(),
            instance_id=generate_id("tactic", rng),
            expires_after_segment=state.segment_index,
            used=False,
        )
        state.tactics.append(instance)
        state.event_log.append(f"{tactic.name} active for next segment!")
    elif tactic.type == TacticType.SKIP_EVENT:
        state.skip_next_event = True
        state.event_log.append(f"{tactic.name} ready! Next event will be skipped.")


def apply_draft_choice(
    run_state: RunState,
    choice_index: int,
    options: Sequence[DraftOption],
    rng: SeededRNG,
) -> RunState:
    """
    Apply the chosen draft option.

    Args:
        run_state: Current state (not modified)
        choice_index: 1-based option index; 0 or out of range skips
        options: Offers from get_draft_options
        rng: Run RNG (ids, upgrade and boost targets)

    Returns:
        New state with stats recomputed, or run_state itself on a skip
    """
    if choice_index < 1 or choice_index > len(options):
        return run_state

    option = options[choice_index - 1]
    state = run_state.model_copy(deep=True)

    if isinstance(option, MemberOption):
        _apply_member(state, option.payload, rng)
    elif isinstance(option, GearOption):
        _apply_gear(state, option.payload, rng)
    elif isinstance(option, TacticOption):
        _apply_tactic(state, option.payload, rng)
    else:
        raise TypeError(f"Unknown draft option: {option!r}")

    state.stats = compute_stats(state)
    logger.debug("Draft %d applied (%s) at segment %d", choice_index, option.type, state.segment_index)
    return state
