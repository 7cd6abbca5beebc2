"""
KeyForge Console Interface
===========================

Rich-powered console abstraction providing a unified presentation layer
for the KeyForge command-line tools.

The class wraps :class:`rich.console.Console` and adds convenience methods
for the banner, section headers, severity-coloured messages and
status spinners -- all with consistent styling.

References:
    - Rich library: https://github.com/Textualize/rich
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

_FORGE_THEME = Theme(
    {
        "forge.banner": "bold bright_cyan",
        "forge.section": "bold bright_magenta",
        "forge.success": "bold green",
        "forge.warning": "bold yellow",
        "forge.error": "bold red",
        "forge.info": "bold bright_blue",
        "forge.dim": "dim white",
        "forge.highlight": "bold bright_white",
        "forge.secret": "bold bright_green",
        "forge.digest": "bright_cyan",
    }
)

_BANNER_ART = r"""[bright_cyan]
  _  __          ______
 | |/ /___ _   _|  ____|__  _ __ __ _  ___
 | ' // _ \ | | | |__ / _ \| '__/ _` |/ _ \
 | . \  __/ |_| |  __| (_) | | | (_| |  __/
 |_|\_\___|\__, |_|   \___/|_|  \__, |\___|
           |___/                |___/
[/bright_cyan]"""

_TAGLINE = "Constrained secret generator and digest workbench"


class ForgeConsole:
    """Unified console interface for KeyForge.

    Usage::

        con = ForgeConsole()
        con.banner()
        con.section("Generated Secret")
        con.success("Report written")
    """

    def __init__(self, *, quiet: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet: Suppress all output (useful in library / test mode).
        """
        self._console = Console(
            theme=_FORGE_THEME,
            quiet=quiet,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Banner
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        """Display the KeyForge ASCII-art banner.

        Args:
            version: Version string shown beneath the logo.
        """
        now = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        subtitle = (
            f"[forge.highlight]{_TAGLINE}[/forge.highlight]\n"
            f"[forge.dim]Version: {version}  |  {now}[/forge.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(0, 2),
        )
        self._console.print(panel)

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(
            f"  {title}  ",
            style="forge.section",
            characters="─",
        )
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers (severity-coloured)
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(
            f"[forge.success][✔] SUCCESS:[/forge.success] {message}"
        )

    def warning(self, message: str) -> None:
        self._console.print(
            f"[forge.warning][⚠] WARNING:[/forge.warning] {message}"
        )

    def error(self, message: str) -> None:
        self._console.print(
            f"[forge.error][✘] ERROR:[/forge.error] {message}"
        )

    def info(self, message: str) -> None:
        self._console.print(
            f"[forge.info][ℹ] INFO:[/forge.info] {message}"
        )

    # ------------------------------------------------------------------ #
    #  Status spinner
    # ------------------------------------------------------------------ #

    @contextmanager
    def status(
        self, message: str = "Working..."
    ) -> Generator[Any, None, None]:
        """Context-manager showing a spinner with a status message.

        Example::

            with con.status("Running self-tests..."):
                suite = tester.run()
        """
        with self._console.status(
            f"[forge.info]{message}[/forge.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj
