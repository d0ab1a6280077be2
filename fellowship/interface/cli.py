"""
Fellowship command line.

Subcommands:
    play     interactive run
    bots     seeded bot batches per leader and strategy
    audit    catalog integrity audit
    catalog  export the active catalog as YAML
    config   show or change saved settings
"""

import argparse
import json
import logging
import time
from pathlib import Path

from rich.prompt import IntPrompt, Prompt

from ..content import audit_catalog, default_catalog, dump_catalog, load_catalog
from ..errors import FellowshipError, LeaderNotFoundError
from ..simulation import STRATEGIES, run_bot_batch
from ..state.schema import RunConfig
from ..systems import (
    apply_draft_choice,
    create_run,
    get_draft_options,
    is_run_over,
    score_run,
    simulate_segment,
)
from ..tools.rng import create_rng
from .config import DEFAULT_CONFIG, Config, load_config, set_value
from .renderer import (
    console,
    show_audit,
    show_banner,
    show_batch_ranking,
    show_batch_table,
    show_draft_options,
    show_error,
    show_final,
    show_hp,
    show_leaders,
    show_run_summary,
    show_segment_log,
)

logger = logging.getLogger(__name__)

INITIAL_DRAFTS = 3


def resolve_catalog(args: argparse.Namespace, config: Config) -> RunConfig:
    """--catalog beats the saved catalog_path, which beats the defaults."""
    path = args.catalog or config.get("catalog_path")
    if path:
        return load_catalog(path)
    return default_catalog()


# -----------------------------------------------------------------------------
# play
# -----------------------------------------------------------------------------

def _choose_draft(state, catalog, rng, segment_index: int):
    options = get_draft_options(state, catalog, rng)
    show_draft_options(options, segment_index)
    choice = IntPrompt.ask(
        "Choose",
        choices=[str(i) for i in range(len(options) + 1)],
        default=1,
        console=console,
    )
    state = apply_draft_choice(state, choice, options, rng)
    if choice and state.event_log:
        console.print(f"[dim]{state.event_log[-1]}[/dim]")
    return state


def cmd_play(args: argparse.Namespace, config: Config) -> int:
    catalog = resolve_catalog(args, config)
    show_banner()

    leader_id = args.leader
    if leader_id is None:
        show_leaders(catalog.leaders)
        leader_id = Prompt.ask(
            "Leader",
            choices=[leader.id for leader in catalog.leaders],
            default=config.get("leader", DEFAULT_CONFIG["leader"]),
            console=console,
        )

    seed = args.seed if args.seed is not None else str(int(time.time()))
    state = create_run(catalog, leader_id, seed)
    rng = create_rng(seed)
    console.print(f"[dim]Seed: {seed}[/dim]")

    for _ in range(INITIAL_DRAFTS):
        state = _choose_draft(state, catalog, rng, 0)

    typewriter = config.get("typewriter", True)
    while not is_run_over(state):
        show_run_summary(state)
        result = simulate_segment(state, catalog, rng)
        state = result.run_state
        show_segment_log(result.segment_log, typewriter=typewriter)
        show_hp(state)

        if not is_run_over(state):
            state = _choose_draft(state, catalog, rng, state.segment_index)

    show_final(state, score_run(state, catalog))
    return 0


# -----------------------------------------------------------------------------
# bots
# -----------------------------------------------------------------------------

def cmd_bots(args: argparse.Namespace, config: Config) -> int:
    catalog = resolve_catalog(args, config)

    leader_ids = args.leader or [leader.id for leader in catalog.leaders]
    strategies = args.strategy or list(STRATEGIES)
    runs = args.runs if args.runs is not None else config.get("runs_per_batch", 100)

    for leader_id in leader_ids:
        if catalog.get_leader(leader_id) is None:
            raise LeaderNotFoundError(leader_id)

    all_batches = []
    for leader_id in leader_ids:
        leader = catalog.get_leader(leader_id)
        batches = [
            run_bot_batch(
                catalog,
                leader_id,
                STRATEGIES[name],
                runs,
                base_seed=f"{args.seed}_{leader_id}_{name}",
                strategy_name=name,
            )
            for name in strategies
        ]
        show_batch_table(leader.name, batches)
        all_batches.extend(batches)

    if len(all_batches) > 1:
        show_batch_ranking(all_batches)
    return 0


# -----------------------------------------------------------------------------
# audit / catalog / config
# -----------------------------------------------------------------------------

def cmd_audit(args: argparse.Namespace, config: Config) -> int:
    result = audit_catalog(resolve_catalog(args, config))
    if args.json:
        console.print_json(json.dumps(result.to_dict()))
    else:
        show_audit(result)
    return result.exit_code


def cmd_catalog(args: argparse.Namespace, config: Config) -> int:
    catalog = resolve_catalog(args, config)
    path = dump_catalog(catalog, args.export)
    console.print(f"Catalog written to {path}")
    return 0


def cmd_config(args: argparse.Namespace, config: Config) -> int:
    if args.set:
        key, raw = args.set
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            value = raw  # Bare strings like smart or balanced
        try:
            set_value(key, value, args.config_dir)
        except KeyError as e:
            show_error(str(e.args[0]))
            return 2
        config = load_config(args.config_dir)

    console.print_json(json.dumps(config))
    return 0


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fellowship", description="Fellowship run simulator")
    parser.add_argument("--catalog", type=Path, help="YAML catalog to use instead of the defaults")
    parser.add_argument("--config-dir", type=Path, default=Path("."), help="Directory holding .fellowship_config.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play a run interactively")
    play.add_argument("--leader", help="Leader id")
    play.add_argument("--seed", help="Run seed (default: current time)")
    play.set_defaults(func=cmd_play)

    bots = sub.add_parser("bots", help="Run bot batches")
    bots.add_argument("--leader", action="append", help="Leader id (repeatable, default: all)")
    bots.add_argument(
        "--strategy", action="append", choices=list(STRATEGIES),
        help="Strategy name (repeatable, default: all)",
    )
    bots.add_argument("--runs", type=int, help="Runs per leader/strategy pair")
    bots.add_argument("--seed", default="batch", help="Base seed")
    bots.set_defaults(func=cmd_bots)

    audit = sub.add_parser("audit", help="Check catalog integrity")
    audit.add_argument("--json", action="store_true", help="Output JSON")
    audit.set_defaults(func=cmd_audit)

    catalog = sub.add_parser("catalog", help="Export the active catalog")
    catalog.add_argument("--export", type=Path, required=True, metavar="PATH")
    catalog.set_defaults(func=cmd_catalog)

    cfg = sub.add_parser("config", help="Show or change saved settings")
    cfg.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"))
    cfg.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s',
    )

    config = load_config(args.config_dir)

    try:
        return args.func(args, config)
    except FellowshipError as e:
        logger.debug("Command failed", exc_info=True)
        show_error(str(e))
        return 2
    except ValueError as e:
        show_error(str(e))
        return 2
