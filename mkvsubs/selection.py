"""
mkvsubs.selection - Interactive selection of files and tracks.

The extraction core only talks to a SelectionGateway. The rich-based
gateway prompts on the terminal; the scripted one answers from pre-seeded
values for non-interactive runs and tests.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table


def parse_selection(text: str, count: int) -> set[int]:
    """Parse a 1-based selection like "1,3-4" into 0-based positions.

    Args:
        text: User input. "all" or "*" selects everything; blank selects nothing.
        count: Number of candidates

    Returns:
        Set of 0-based positions

    Raises:
        ValueError: If the input is malformed or out of range
    """
    text = text.strip().lower()
    if not text:
        return set()
    if text in {"all", "*"}:
        return set(range(count))

    selected = set()
    for part in text.replace(" ", ",").split(","):
        if not part:
            continue
        if "-" in part:
            start_str, _, end_str = part.partition("-")
            start, end = int(start_str), int(end_str)
            if start > end:
                raise ValueError(f"Invalid range: {part}")
        else:
            start = end = int(part)
        if start < 1 or end > count:
            raise ValueError(f"Choice out of range 1-{count}: {part}")
        selected.update(range(start - 1, end))
    return selected


class SelectionGateway:
    """Capabilities the extraction core needs from the interactive layer."""

    def choose_one(self, candidates: Sequence[str], header: str) -> int | None:
        """Pick one candidate; returns its position or None if cancelled."""
        raise NotImplementedError

    def choose_many(self, candidates: Sequence[str], header: str) -> set[int]:
        """Pick zero or more candidates; an empty set means abort."""
        raise NotImplementedError

    def confirm_overwrite(self, path: Path) -> bool:
        """Ask whether an existing output file may be overwritten."""
        raise NotImplementedError


class RichSelectionGateway(SelectionGateway):
    """Terminal prompts rendered with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _show(self, candidates: Sequence[str], header: str) -> None:
        table = Table(title=header)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Choice")
        for i, candidate in enumerate(candidates, start=1):
            table.add_row(str(i), escape(candidate))
        self.console.print(table)

    def choose_one(self, candidates: Sequence[str], header: str) -> int | None:
        if not candidates:
            return None
        self._show(candidates, header)
        answer = Prompt.ask(
            "Choose one (blank to cancel)",
            console=self.console,
            choices=[str(i) for i in range(1, len(candidates) + 1)] + [""],
            default="",
            show_choices=False,
            show_default=False,
        )
        if not answer:
            return None
        return int(answer) - 1

    def choose_many(self, candidates: Sequence[str], header: str) -> set[int]:
        if not candidates:
            return set()
        self._show(candidates, header)
        while True:
            answer = Prompt.ask(
                "Choose tracks (e.g. 1,3 or 1-2 or all; blank to cancel)",
                console=self.console,
                default="",
                show_default=False,
            )
            try:
                return parse_selection(answer, len(candidates))
            except ValueError as e:
                self.console.print(f"[red]{e}[/red]")

    def confirm_overwrite(self, path: Path) -> bool:
        return Confirm.ask(
            f"Output file already exists: [cyan]{escape(str(path))}[/cyan]. Overwrite?",
            console=self.console,
            default=False,
        )


class ScriptedSelectionGateway(SelectionGateway):
    """Answers from pre-seeded values instead of prompting.

    Args:
        file_choice: Position returned by choose_one
        track_choices: Positions returned by choose_many
        overwrite: Answer for every overwrite confirmation
    """

    def __init__(
        self,
        file_choice: int | None = None,
        track_choices: Iterable[int] = (),
        overwrite: bool = False,
    ) -> None:
        self.file_choice = file_choice
        self.track_choices = set(track_choices)
        self.overwrite = overwrite
        self.confirmed: list[Path] = []

    def choose_one(self, candidates: Sequence[str], header: str) -> int | None:
        if self.file_choice is None or not 0 <= self.file_choice < len(candidates):
            return None
        return self.file_choice

    def choose_many(self, candidates: Sequence[str], header: str) -> set[int]:
        return {i for i in self.track_choices if 0 <= i < len(candidates)}

    def confirm_overwrite(self, path: Path) -> bool:
        self.confirmed.append(path)
        return self.overwrite
