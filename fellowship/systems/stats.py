"""
Stat aggregation.

Pure functions: identical input gives identical output and nothing outside
the arguments is read or written.
"""

from ..state.schema import (
    MemberInstance,
    RunConfig,
    RunState,
    StatBoosts,
    StatType,
    Stats,
    TacticType,
)


def member_base_contribution(member: MemberInstance) -> int:
    """base_value + scaling * (level - 1)"""
    return member.base_value + member.scaling * (member.level - 1)


def get_member_all_stats(
    member: MemberInstance,
    permanent_boosts: dict[str, StatBoosts],
) -> StatBoosts:
    """
    Stat contributions of one member.

    Primary stats get the level-scaled base plus any boost on that stat.
    Boosts on non-primary stats contribute their flat value only.
    """
    member_boosts = permanent_boosts.get(member.id, {})
    base = member_base_contribution(member)

    result: StatBoosts = {}
    for stat in member.primary_stats:
        result[stat] = base + member_boosts.get(stat, 0)

    for stat, boost in member_boosts.items():
        if stat not in member.primary_stats and boost:
            result[stat] = boost

    return result


def get_member_contribution(
    member: MemberInstance,
    permanent_boosts: dict[str, StatBoosts],
) -> int:
    """Contribution on the member's first primary stat."""
    first = member.primary_stats[0]
    return get_member_all_stats(member, permanent_boosts)[first]


def get_temporary_boosts(run_state: RunState) -> StatBoosts:
    """
    Percentage boosts active for the current segment.

    Boosts on the same stat add up before scaling (+100% and +50% is +150%).
    """
    boosts: StatBoosts = {}
    for tactic in run_state.tactics:
        if (
            tactic.type == TacticType.NEXT_SEGMENT_BOOST
            and not tactic.used
            and tactic.expires_after_segment == run_state.segment_index
            and tactic.stat_type is not None
        ):
            boosts[tactic.stat_type] = boosts.get(tactic.stat_type, 0) + tactic.value
    return boosts


def apply_percentage_boosts(stats: Stats, boosts: StatBoosts) -> Stats:
    """Scale each boosted stat once: floor(value * (1 + percent / 100))."""
    values = stats.as_dict()
    for stat, percent in boosts.items():
        if percent:
            values[stat] = values[stat] * (100 + percent) // 100
    return Stats(**{stat.value: value for stat, value in values.items()})


def compute_stats(
    run_state: RunState,
    catalog: RunConfig | None = None,
    temporary_boosts: StatBoosts | None = None,
) -> Stats:
    """
    Compute fellowship stats from leader, members, boosts.

    Args:
        run_state: Source of leader, members and permanent boosts
        catalog: Accepted for call-site symmetry with the other engine
            functions; aggregation reads nothing from it
        temporary_boosts: Optional percentage boosts for this segment

    Returns:
        New Stats; run_state is not modified
    """
    values = {stat: run_state.leader.base_stats.get(stat, 0) for stat in StatType}

    for member in run_state.members:
        for stat, value in get_member_all_stats(member, run_state.permanent_boosts).items():
            values[stat] += value

    stats = Stats(**{stat.value: value for stat, value in values.items()})

    if temporary_boosts:
        stats = apply_percentage_boosts(stats, temporary_boosts)

    return stats
