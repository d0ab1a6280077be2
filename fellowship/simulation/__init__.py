"""
Bot simulation for balance testing.

Strategies pick drafts; the runner plays whole runs and seeded batches.
"""

from .strategies import BotStrategy, STRATEGIES, get_strategy
from .runner import BotRunSummary, BatchResult, run_bot, run_bot_batch

__all__ = [
    "BotStrategy",
    "STRATEGIES",
    "get_strategy",
    "BotRunSummary",
    "BatchResult",
    "run_bot",
    "run_bot_batch",
]
