"""
Passguard Console Interface
============================

Themed wrapper over :class:`rich.console.Console` used by the CLI for its
banner, section rules, one-line outcome messages and the bulk-analysis
spinner. Strength tiers map onto a fixed red-to-green palette through
:func:`tier_style` and :func:`tier_colour`.

References:
    - Rich console API. https://rich.readthedocs.io/en/stable/console.html
"""

from __future__ import annotations

import datetime as _dt
from contextlib import contextmanager
from typing import Any, Generator

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------
_PASSGUARD_THEME = Theme(
    {
        "pg.banner": "bold bright_cyan",
        "pg.section": "bold bright_magenta",
        "pg.success": "bold green",
        "pg.warning": "bold yellow",
        "pg.error": "bold red",
        "pg.info": "bold bright_blue",
        "pg.dim": "dim white",
        "pg.highlight": "bold bright_white",
        "pg.tier.very_weak": "bold red",
        "pg.tier.weak": "bold dark_orange",
        "pg.tier.moderate": "bold yellow",
        "pg.tier.strong": "bold bright_blue",
        "pg.tier.very_strong": "bold green",
        "pg.tier.excellent": "bold bright_green",
    }
)

# Tier value -> (theme style, raw colour for bars)
_TIER_STYLES: dict[str, tuple[str, str]] = {
    "Very Weak": ("pg.tier.very_weak", "red"),
    "Weak": ("pg.tier.weak", "dark_orange"),
    "Moderate": ("pg.tier.moderate", "yellow"),
    "Strong": ("pg.tier.strong", "bright_blue"),
    "Very Strong": ("pg.tier.very_strong", "green"),
    "Excellent": ("pg.tier.excellent", "bright_green"),
}

_BANNER_ART = r"""
[bright_cyan]
  ___  ____ ____ ____ ____ _  _ ____ ____ ___
  |__] |__| [__  [__  | __ |  | |__| |__/ |  \
  |    |  | ___] ___] |__] |__| |  | |  \ |__/
[/bright_cyan]"""

_TAGLINE = "Password Strength Analysis & Generation"


def tier_style(tier: Any) -> str:
    """Theme style name for a strength tier (enum member or value)."""
    value = getattr(tier, "value", tier)
    return _TIER_STYLES.get(str(value), ("pg.dim", "white"))[0]


def tier_colour(tier: Any) -> str:
    """Plain Rich colour for a strength tier, for bars and borders."""
    value = getattr(tier, "value", tier)
    return _TIER_STYLES.get(str(value), ("pg.dim", "white"))[1]


class PassguardConsole:
    """Unified console interface for the Passguard CLI.

    Usage::

        con = PassguardConsole()
        con.banner()
        con.section("Strength Assessment")
        con.success("Report written")
    """

    def __init__(self, *, quiet: bool = False) -> None:
        """*quiet* silences every write, including the banner."""
        self._console = Console(
            theme=_PASSGUARD_THEME,
            quiet=quiet,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Wrapped Rich console, for tables and panels built by callers."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Banner and sections
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        """Logo panel with the tagline, *version* and local time."""
        stamp = _dt.datetime.now().strftime("%Y-%m-%d %H:%M")
        subtitle = (
            f"[pg.highlight]{_TAGLINE}[/pg.highlight]\n"
            f"[pg.dim]v{version}  |  {stamp}[/pg.dim]"
        )
        body = Text.from_markup(f"{_BANNER_ART}\n{subtitle}")
        self._console.print(
            Panel(Align.center(body), border_style="pg.banner", padding=(0, 2))
        )

    def section(self, title: str) -> None:
        """Horizontal rule titled *title*, followed by a blank line."""
        self._console.rule(f"  {title}  ", style="pg.section", characters="─")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(f"[pg.success][✔] SUCCESS:[/pg.success] {message}")

    def warning(self, message: str) -> None:
        self._console.print(f"[pg.warning][⚠] WARNING:[/pg.warning] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[pg.error][✘] ERROR:[/pg.error] {message}")

    # ------------------------------------------------------------------ #
    #  Status spinner
    # ------------------------------------------------------------------ #

    @contextmanager
    def status(self, message: str = "Working...") -> Generator[Any, None, None]:
        """Spinner shown while the block runs; yields the Rich ``Status``."""
        label = f"[pg.info]{message}[/pg.info]"
        with self._console.status(label, spinner="dots", spinner_style="pg.banner") as live:
            yield live

