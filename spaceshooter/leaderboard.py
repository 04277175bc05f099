"""High-score table kept as ``name: score`` lines in a text file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

SHOWN_ENTRIES = 10
READ_LINES = 20
DEFAULT_NAME = "PLAYER"

_LINE = re.compile(r"\s*([^:]+):\s*([+-]?\d+)")


@dataclass(frozen=True)
class Entry:
    """One leaderboard row."""

    name: str
    score: int

    def __str__(self) -> str:
        return f"{self.name}: {self.score}"


def parse_line(line: str) -> Entry:
    """Parse a ``name: score`` line; raise ValueError if it is not one."""
    match = _LINE.match(line)
    if match is None:
        raise ValueError(f"not a leaderboard line: {line!r}")
    return Entry(match.group(1), int(match.group(2)))


def read_entries(path, limit=SHOWN_ENTRIES) -> list[Entry]:
    """Read up to ``limit`` entries, stopping at the first malformed line."""
    entries: list[Entry] = []
    with open(Path(path), encoding="utf-8") as handle:
        for line in handle:
            if len(entries) >= limit:
                break
            if not line.strip():
                continue
            try:
                entries.append(parse_line(line))
            except ValueError:
                break
    return entries


def _rank(entries: list[Entry]) -> list[Entry]:
    """Order by score, highest first, by repeatedly swapping in the first maximum."""
    ranked = list(entries)
    for position in range(len(ranked)):
        best = max(range(position, len(ranked)), key=lambda index: ranked[index].score)
        ranked[position], ranked[best] = ranked[best], ranked[position]
    return ranked


def record_score(path, name, score) -> list[Entry]:
    """Add a score to the table file, keep the top entries and return them."""
    path = Path(path)
    existing: list[Entry] = []
    if path.exists():
        with open(path, encoding="utf-8") as handle:
            for number, line in enumerate(handle):
                if number >= READ_LINES:
                    break
                try:
                    existing.append(parse_line(line))
                except ValueError:
                    continue
    existing.append(Entry(name or DEFAULT_NAME, int(score)))
    top = _rank(existing)[:SHOWN_ENTRIES]
    path.write_text("".join(f"{entry}\n" for entry in top), encoding="utf-8")
    return top