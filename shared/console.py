"""
Keysmith Console Interface
===========================

Rich-powered console abstraction shared by the Keysmith output layer.

Wraps :class:`rich.console.Console` with a fixed theme and helpers for
the banner, section headers, status messages, tables and the findings
table, so every command renders with the same palette.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import datetime as _dt
from contextlib import contextmanager
from typing import Any, Generator, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_KEYSMITH_THEME = Theme(
    {
        "keysmith.banner": "bold bright_cyan",
        "keysmith.section": "bold bright_magenta",
        "keysmith.success": "bold green",
        "keysmith.warning": "bold yellow",
        "keysmith.error": "bold red",
        "keysmith.info": "bold bright_blue",
        "keysmith.dim": "dim white",
        "keysmith.critical": "bold white on red",
        "keysmith.high": "bold red",
        "keysmith.medium": "bold yellow",
        "keysmith.low": "bold bright_cyan",
        "keysmith.informational": "bold bright_blue",
    }
)

_BANNER_ART = r"""[bright_cyan]
  _  __               _ _   _
 | |/ /___ _   _ ___ _ __ ___ (_) |_| |__
 | ' // _ \ | | / __| '_ ` _ \| | __| '_ \
 | . \  __/ |_| \__ \ | | | | | | |_| | | |
 |_|\_\___|\__, |___/_| |_| |_|_|\__|_| |_|
           |___/
[/bright_cyan]"""

_TAGLINE = "Password Generator & Strength Checker"

_SEVERITY_STYLES: dict[str, str] = {
    "CRITICAL": "keysmith.critical",
    "HIGH": "keysmith.high",
    "MEDIUM": "keysmith.medium",
    "LOW": "keysmith.low",
    "INFO": "keysmith.informational",
}


class KeysmithConsole:
    """Unified console interface for Keysmith commands.

    Usage::

        con = KeysmithConsole()
        con.banner()
        con.section("Generated Passwords")
        con.success("Done")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (library / test mode).
            record: Enable Rich recording for HTML export.
        """
        self._console = Console(
            theme=_KEYSMITH_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    def banner(self, version: str = "1.0.0") -> None:
        now = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        subtitle = (
            f"[keysmith.banner]{_TAGLINE}[/keysmith.banner]\n"
            f"[keysmith.dim]Version: {version}  |  {now}[/keysmith.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(0, 2),
        )
        self._console.print(panel)

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(f"  {title}  ", style="keysmith.section", characters="─")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Status messages
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(f"[keysmith.success][✔] SUCCESS:[/keysmith.success] {message}")

    def warning(self, message: str) -> None:
        self._console.print(f"[keysmith.warning][⚠] WARNING:[/keysmith.warning] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[keysmith.error][✘] ERROR:[/keysmith.error] {message}")

    def info(self, message: str) -> None:
        self._console.print(f"[keysmith.info][ℹ] INFO:[/keysmith.info] {message}")

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table; every cell is stringified."""
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))

        self._console.print(tbl)

    def findings_table(self, findings: Sequence[Any]) -> None:
        """Render findings with severity colouring.

        Expects objects with ``severity``, ``title`` and ``description``
        attributes (see :class:`shared.models.Finding`).
        """
        tbl = Table(
            title="Findings",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        tbl.add_column("#", style="dim", width=4, justify="right")
        tbl.add_column("Severity", width=10)
        tbl.add_column("Title")
        tbl.add_column("Description", ratio=2)

        for idx, finding in enumerate(findings, start=1):
            sev = getattr(finding, "severity", "INFO")
            sev_name = sev.value if hasattr(sev, "value") else str(sev).upper()
            sev_style = _SEVERITY_STYLES.get(sev_name, "")
            sev_cell = f"[{sev_style}]{sev_name}[/{sev_style}]" if sev_style else sev_name
            tbl.add_row(
                str(idx),
                sev_cell,
                str(getattr(finding, "title", "")),
                str(getattr(finding, "description", "")),
            )

        self._console.print(tbl)

    @contextmanager
    def status(self, message: str = "Working...") -> Generator[Any, None, None]:
        """Context manager showing a spinner with a status message."""
        with self._console.status(
            f"[keysmith.info]{message}[/keysmith.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()

    def export_html(self) -> str:
        """Export recorded output as HTML (requires ``record=True``)."""
        return self._console.export_html()
