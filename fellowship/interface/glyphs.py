"""
Glyph system for fellowship run output.

Uses Unicode symbols with ASCII fallbacks.
Toggle USE_UNICODE based on terminal support.
"""

USE_UNICODE = True  # Set False for basic terminals


def g(name: str) -> str:
    """Get glyph by name, with fallback support."""
    glyphs = GLYPHS_UNICODE if USE_UNICODE else GLYPHS_ASCII
    return glyphs.get(name, "?")


# -----------------------------------------------------------------------------
# Unicode Glyphs (default)
# -----------------------------------------------------------------------------

GLYPHS_UNICODE = {
    # Event outcomes
    "success": "✓",
    "mitigated": "◐",
    "failure": "✗",
    "skipped": "»",

    # Stats
    "combat": "⚔",
    "survival": "✚",
    "social": "◉",
    "chaos": "✦",

    # HP bar segments
    "hp_full": "█",
    "hp_mid": "▓",
    "hp_low": "░",
    "hp_empty": "·",

    # Draft offers
    "member": "☺",
    "gear": "⚙",
    "tactic": "◈",

    # Run milestones
    "segment": "▶",
    "level_up": "▲",
    "victory": "★",
    "fallen": "☠",

    # UI elements
    "prompt": "›",
    "arrow": "→",
    "bullet": "•",
    "warning": "⚠",
}


# -----------------------------------------------------------------------------
# ASCII Fallbacks
# -----------------------------------------------------------------------------

GLYPHS_ASCII = {
    "success": "[+]",
    "mitigated": "[~]",
    "failure": "[X]",
    "skipped": ">>",

    "combat": "[C]",
    "survival": "[S]",
    "social": "[O]",
    "chaos": "[?]",

    "hp_full": "#",
    "hp_mid": "=",
    "hp_low": "-",
    "hp_empty": ".",

    "member": "[M]",
    "gear": "[G]",
    "tactic": "[T]",

    "segment": ">",
    "level_up": "^",
    "victory": "*",
    "fallen": "x",

    "prompt": ">",
    "arrow": "->",
    "bullet": "*",
    "warning": "!",
}


def hp_bar(hp: int, max_hp: int, width: int = 20) -> str:
    """Generate a visual HP bar."""
    percent = int(hp * 100 / max_hp) if max_hp > 0 else 0
    filled = int((percent / 100) * width)

    if percent > 50:
        char = g("hp_full")
    elif percent > 25:
        char = g("hp_mid")
    else:
        char = g("hp_low")

    return char * filled + g("hp_empty") * (width - filled)


def outcome_glyph(line: str) -> str | None:
    """Glyph for a log line carrying an outcome marker, if any."""
    for marker, name in (
        ("[SUCCESS]", "success"),
        ("[MITIGATED]", "mitigated"),
        ("[FAILURE]", "failure"),
        ("[SKIPPED]", "skipped"),
    ):
        if marker in line:
            return g(name)
    return None
