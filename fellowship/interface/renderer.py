"""
Display and rendering helpers for the fellowship CLI.

Handles theming, segment transcripts, draft offers and batch tables.
"""

import time
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..content.audit import AuditResult, Severity
from ..simulation.runner import BatchResult
from ..state.schema import DraftOption, Leader, RunState, StatType
from ..systems.lifecycle import get_run_summary
from .glyphs import g, hp_bar, outcome_glyph


# Shared console instance
console = Console()

# -----------------------------------------------------------------------------
# Theme
# -----------------------------------------------------------------------------

THEME = {
    "primary": "dark_goldenrod",
    "secondary": "grey70",
    "success": "green",
    "warning": "yellow",
    "danger": "dark_red",
    "accent": "cyan",
    "dim": "dim",
}

OUTCOME_STYLES = {
    "[SUCCESS]": THEME["success"],
    "[MITIGATED]": THEME["warning"],
    "[FAILURE]": THEME["danger"],
    "[SKIPPED]": THEME["accent"],
}

TYPEWRITER_DELAY = 0.03  # seconds per line


def show_banner():
    """Display the title banner."""
    text = Text()
    text.append("  F E L L O W S H I P\n", style=f"bold {THEME['primary']}")
    text.append("  ten segments, three events each, one leader\n", style=THEME["dim"])
    console.print(Panel(text, border_style=THEME["primary"]))


def show_leaders(leaders: Sequence[Leader]):
    """List selectable leaders."""
    table = Table(title="Leaders", border_style=THEME["primary"])
    table.add_column("#", style=THEME["accent"])
    table.add_column("Id")
    table.add_column("Name", style="bold")
    table.add_column("Stats")
    table.add_column("HP+", justify="right")
    table.add_column("Slots", justify="right")

    for i, leader in enumerate(leaders, 1):
        stats = " ".join(
            f"{g(stat.value)}{leader.base_stats.get(stat, 0)}" for stat in StatType
        )
        table.add_row(
            str(i), leader.id, leader.name, stats,
            str(leader.bonus_hp), str(leader.base_member_slots),
        )
    console.print(table)


def _style_line(line: str) -> Text:
    for marker, style in OUTCOME_STYLES.items():
        if marker in line:
            glyph = outcome_glyph(line) or ""
            return Text(f"{glyph} {line.strip()}", style=style)
    if line.startswith("SEGMENT ") or "HAS FALLEN" in line:
        return Text(line, style=f"bold {THEME['primary']}")
    if "leveled up" in line:
        return Text(f"{g('level_up')} {line}", style=THEME["success"])
    return Text(line)


def show_segment_log(lines: Sequence[str], typewriter: bool = False):
    """Print a segment transcript, colouring outcome lines."""
    for line in lines:
        console.print(_style_line(line))
        if typewriter:
            time.sleep(TYPEWRITER_DELAY)


def show_hp(run_state: RunState):
    percent = run_state.hp * 100 // run_state.max_hp if run_state.max_hp else 0
    style = THEME["success"] if percent > 50 else THEME["warning"] if percent > 25 else THEME["danger"]
    console.print(
        f"[{style}]HP {hp_bar(run_state.hp, run_state.max_hp)} "
        f"{run_state.hp}/{run_state.max_hp}[/{style}]"
    )


def show_draft_options(options: Sequence[DraftOption], segment_index: int):
    """Display the three draft offers."""
    title = "Opening Draft" if segment_index <= 1 else f"Draft before Segment {segment_index}"
    body = "\n".join(
        f"[{THEME['accent']}]{i}.[/{THEME['accent']}] {g(option.type)} {escape(option.description)}"
        for i, option in enumerate(options, 1)
    )
    body += f"\n[{THEME['dim']}]0. Skip[/{THEME['dim']}]"
    console.print(Panel(body, title=f"[bold]{title}[/bold]", border_style=THEME["primary"]))


def show_run_summary(run_state: RunState):
    console.print(Panel(
        get_run_summary(run_state).strip(),
        border_style=THEME["secondary"],
    ))


def show_final(run_state: RunState, score: int):
    """Victory or defeat banner with final score."""
    if run_state.victorious:
        title = f"{g('victory')} VICTORY {g('victory')}"
        style = THEME["success"]
    else:
        title = f"{g('fallen')} DEFEAT"
        style = THEME["danger"]
    console.print(Panel(
        f"Reached segment {min(run_state.segment_index, 10)}/10\nFinal score: [bold]{score}[/bold]",
        title=f"[bold]{title}[/bold]",
        border_style=style,
    ))


# -----------------------------------------------------------------------------
# Bot batches
# -----------------------------------------------------------------------------

def show_batch_table(leader_name: str, batches: Sequence[BatchResult]):
    """One row per strategy for a leader."""
    table = Table(title=f"{leader_name}", border_style=THEME["primary"])
    table.add_column("Strategy", style="bold", no_wrap=True)
    table.add_column("Win%", justify="right")
    table.add_column("Seg", justify="right")
    table.add_column("HP", justify="right")
    table.add_column("Score", justify="right")
    for stat in StatType:
        table.add_column(g(stat.value), justify="right")

    for batch in batches:
        stats = batch.avg_stats
        table.add_row(
            batch.strategy,
            f"{batch.win_rate * 100:.1f}",
            f"{batch.avg_segment_reached:.1f}",
            f"{batch.avg_final_hp:.1f}",
            f"{batch.avg_score:.0f}",
            *(f"{stats[stat]:.1f}" for stat in StatType),
        )
    console.print(table)


def show_batch_ranking(batches: Sequence[BatchResult]):
    """All leader/strategy pairs sorted by win rate."""
    table = Table(title="Summary by win rate", border_style=THEME["secondary"])
    table.add_column("Leader")
    table.add_column("Strategy")
    table.add_column("Runs", justify="right")
    table.add_column("Win %", justify="right")
    table.add_column("Avg Score", justify="right")

    for batch in sorted(batches, key=lambda b: (-b.win_rate, -b.avg_score)):
        table.add_row(
            batch.leader_id,
            batch.strategy,
            str(len(batch.runs)),
            f"{batch.win_rate * 100:.1f}",
            f"{batch.avg_score:.0f}",
        )
    console.print(table)


# -----------------------------------------------------------------------------
# Audit
# -----------------------------------------------------------------------------

SEVERITY_STYLES = {
    Severity.ERROR: THEME["danger"],
    Severity.WARNING: THEME["warning"],
    Severity.INFO: THEME["dim"],
}


def show_audit(result: AuditResult):
    table = Table(title="Catalog Audit", border_style=THEME["primary"])
    table.add_column("Severity")
    table.add_column("Category")
    table.add_column("Message")

    for severity in (Severity.ERROR, Severity.WARNING, Severity.INFO):
        style = SEVERITY_STYLES[severity]
        for issue in (i for i in result.issues if i.severity == severity):
            table.add_row(
                f"[{style}]{severity.value.upper()}[/{style}]",
                issue.category,
                escape(issue.message),
            )

    if result.issues:
        console.print(table)
    else:
        console.print(f"[{THEME['success']}]{g('success')} All checks passed[/{THEME['success']}]")

    status = "HEALTHY" if result.is_healthy else "BROKEN"
    style = THEME["success"] if result.is_healthy else THEME["danger"]
    console.print(
        f"{result.error_count} error(s), {result.warning_count} warning(s), "
        f"{result.info_count} info. Status: [{style}]{status}[/{style}]"
    )


def show_error(message: str):
    console.print(f"[{THEME['danger']}]{g('warning')} {escape(message)}[/{THEME['danger']}]")
