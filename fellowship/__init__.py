"""
Fellowship run engine.

A run is fully determined by (catalog, leader_id, seed) plus the draft
choices made along the way.
"""

from .errors import (
    FellowshipError,
    ConfigurationError,
    LeaderNotFoundError,
    SegmentNotFoundError,
    CatalogLoadError,
    EmptyInputError,
)
from .state import (
    StatType,
    GearType,
    TacticType,
    SegmentType,
    EventOutcome,
    Stats,
    RunState,
    RunConfig,
    DraftOption,
)
from .tools import SeededRNG, create_rng
from .systems import (
    create_run,
    simulate_segment,
    get_draft_options,
    apply_draft_choice,
    is_run_over,
    score_run,
    compute_stats,
    resolve_event,
    get_run_summary,
)
from .content import default_catalog, load_catalog, dump_catalog, audit_catalog
from .simulation import run_bot, run_bot_batch, STRATEGIES

__version__ = "0.1.0"

__all__ = [
    # Errors
    "FellowshipError",
    "ConfigurationError",
    "LeaderNotFoundError",
    "SegmentNotFoundError",
    "CatalogLoadError",
    "EmptyInputError",
    # Models
    "StatType",
    "GearType",
    "TacticType",
    "SegmentType",
    "EventOutcome",
    "Stats",
    "RunState",
    "RunConfig",
    "DraftOption",
    # RNG
    "SeededRNG",
    "create_rng",
    # Engine
    "create_run",
    "simulate_segment",
    "get_draft_options",
    "apply_draft_choice",
    "is_run_over",
    "score_run",
    "compute_stats",
    "resolve_event",
    "get_run_summary",
    # Content
    "default_catalog",
    "load_catalog",
    "dump_catalog",
    "audit_catalog",
    # Bots
    "run_bot",
    "run_bot_batch",
    "STRATEGIES",
]
