"""
Pytest fixtures for fellowship engine tests.

Provides the default catalog, seeded RNGs, and builders for hand-made
run states so formula tests don't depend on generated content.
"""

import pytest
from pathlib import Path

# Add repo root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fellowship.content import default_catalog, default_catalog_data
from fellowship.state.schema import (
    DamageTable,
    EventDefinition,
    Leader,
    MemberInstance,
    RunConfig,
    RunState,
    SegmentDefinition,
    SegmentType,
    StatType,
)
from fellowship.systems import create_run, compute_stats
from fellowship.tools.rng import create_rng


@pytest.fixture
def catalog():
    """Fresh default catalog."""
    return default_catalog()


@pytest.fixture
def catalog_data():
    """Raw default catalog mapping, safe to edit per test."""
    import copy
    return copy.deepcopy(default_catalog_data())


@pytest.fixture
def rng():
    """RNG with a fixed seed."""
    return create_rng("test-seed")


@pytest.fixture
def run_state(catalog):
    """Freshly created run for the balanced leader."""
    return create_run(catalog, "balanced", "test-seed")


@pytest.fixture
def make_member():
    """Build a member instance without going through the RNG."""
    def _make(
        member_id="m1",
        stats=(StatType.COMBAT,),
        base_value=3,
        scaling=2,
        level=1,
        rank=1,
        name=None,
    ):
        return MemberInstance(
            id=member_id,
            template_id=f"tpl_{member_id}",
            name=name or member_id.title(),
            primary_stats=list(stats),
            rank=rank,
            base_value=base_value,
            scaling=scaling,
            level=level,
        )
    return _make


@pytest.fixture
def make_event():
    """Build an event with a uniform threshold and standard damage."""
    def _make(check_type="combat", threshold=5, event_id="e1", damage=(0, 3, 8)):
        stats = [StatType(part) for part in check_type.split("+")]
        return EventDefinition(
            id=event_id,
            name=f"Event {event_id}",
            description="Test event.",
            check_type=check_type,
            thresholds={stat: threshold for stat in stats},
            damage=DamageTable(success=damage[0], mitigated=damage[1], failure=damage[2]),
        )
    return _make


@pytest.fixture
def make_state(make_event):
    """
    Build a run state by hand.

    Segments default to ten single-stat combat segments whose events all
    have the given threshold and damage.
    """
    def _make(
        base_stats=None,
        members=None,
        hp=100,
        max_hp=100,
        member_slots=3,
        segment_index=1,
        threshold=5,
        damage=(0, 3, 8),
        segments=None,
        rng_seed="hand-built",
        **extra,
    ):
        leader = Leader(
            id="tester",
            name="The Tester",
            base_stats=base_stats if base_stats is not None else {StatType.COMBAT: 10},
            base_member_slots=member_slots,
        )
        if segments is None:
            segments = [
                SegmentDefinition(
                    index=i,
                    type=SegmentType.COMBAT,
                    events=[
                        make_event("combat", threshold, f"s{i}e{e}", damage)
                        for e in range(1, 4)
                    ],
                )
                for i in range(1, 11)
            ]
        state = RunState(
            leader_id=leader.id,
            leader=leader,
            hp=hp,
            max_hp=max_hp,
            members=members or [],
            member_slots=member_slots,
            segment_index=segment_index,
            segments=segments,
            rng_seed=rng_seed,
            **extra,
        )
        state.stats = compute_stats(state)
        return state
    return _make


@pytest.fixture
def tiny_catalog(catalog_data):
    """One leader, one member per rank, a single gear and tactic."""
    catalog_data["leaders"] = [catalog_data["leaders"][0]]
    catalog_data["member_templates"] = [
        m for m in catalog_data["member_templates"] if m["id"] in ("soldier", "knight", "champion")
    ]
    catalog_data["gear_templates"] = [catalog_data["gear_templates"][1]]  # Healing Salve
    catalog_data["tactic_templates"] = [catalog_data["tactic_templates"][0]]
    catalog_data["tactic_pools"] = {"military": catalog_data["tactic_pools"]["military"]}
    return RunConfig.model_validate(catalog_data)
