"""
Program source store for MINBASIC.

``ProgramStore`` keeps the raw text of each numbered line, ordered by line number.
It is what the REPL edits and what ``load_source`` builds from a file; the run loop
parses it afresh before every run.

Loader rules:
    - Each source line is ``<integer> <statement text>``.
    - Blank lines, and lines whose first field is not a positive integer, are skipped.
    - A numbered line with no statement text is skipped.
    - A repeated line number replaces the earlier text.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path


class ProgramStore(Mapping[int, str]):
    """Ordered, editable mapping of line number to statement text."""

    def __init__(self, lines: Mapping[int, str] | None = None) -> None:
        self._lines: dict[int, str] = {}
        for number, text in (lines or {}).items():
            self.set_line(number, text)

    def __getitem__(self, number: int) -> str:
        return self._lines[number]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._lines))

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"ProgramStore({dict(self.items())!r})"

    def set_line(self, number: int, text: str) -> None:
        """Inserts or replaces line ``number``.

        Raises:
            ValueError: If ``number`` is not positive or ``text`` is blank.
        """
        if number < 1:
            raise ValueError(f"Line numbers must be positive, got {number}")
        text = text.strip()
        if not text:
            raise ValueError(f"Line {number} has no statement text")
        self._lines[number] = text

    def delete_line(self, number: int) -> bool:
        """Removes line ``number``; returns False if it did not exist."""
        return self._lines.pop(number, None) is not None

    def clear(self) -> None:
        self._lines.clear()

    def listing(self) -> list[str]:
        return [f"{number} {text}" for number, text in self.items()]


def split_numbered_line(raw: str) -> tuple[int, str] | None:
    """Splits ``"<n> <text>"`` into ``(n, text)``.

    Returns None when the first field is not a positive integer. ``text`` may be
    empty, which the REPL treats as a delete request.
    """
    fields = raw.strip().split(maxsplit=1)
    if not fields or not fields[0].isascii() or not fields[0].isdigit():
        return None
    number = int(fields[0])
    if number < 1:
        return None
    return number, fields[1].strip() if len(fields) > 1 else ""


def load_source(text: str) -> ProgramStore:
    store = ProgramStore()
    for raw in text.splitlines():
        parsed = split_numbered_line(raw)
        if parsed is None or not parsed[1]:
            continue
        store.set_line(*parsed)
    return store


def load_file(path: str | Path) -> ProgramStore:
    with open(path, encoding="utf-8") as f:
        return load_source(f.read())


__all__ = ["ProgramStore", "load_file", "load_source", "split_numbered_line"]
