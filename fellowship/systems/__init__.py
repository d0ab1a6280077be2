"""
Core engine systems.

Pure state-transition functions: each takes a RunState (plus catalog and
RNG where needed) and returns a new one. No globals, no I/O.
"""

from .generator import generate_segments, create_event, SEGMENT_COUNT, EVENTS_PER_SEGMENT
from .stats import (
    compute_stats,
    get_member_all_stats,
    get_member_contribution,
    get_temporary_boosts,
)
from .events import resolve_event, count_outcomes, EventResolution, StatCheck
from .segments import simulate_segment, SegmentResult
from .draft import get_draft_options, apply_draft_choice, generate_id, rank_for_segment
from .lifecycle import create_run, is_run_over, score_run, get_run_summary

__all__ = [
    # Generation
    "generate_segments",
    "create_event",
    "SEGMENT_COUNT",
    "EVENTS_PER_SEGMENT",
    # Stats
    "compute_stats",
    "get_member_all_stats",
    "get_member_contribution",
    "get_temporary_boosts",
    # Events
    "resolve_event",
    "count_outcomes",
    "EventResolution",
    "StatCheck",
    # Segments
    "simulate_segment",
    "SegmentResult",
    # Draft
    "get_draft_options",
    "apply_draft_choice",
    "generate_id",
    "rank_for_segment",
    # Lifecycle
    "create_run",
    "is_run_over",
    "score_run",
    "get_run_summary",
]
