"""Reading sensor values written to a text file by an external helper."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"\s*([+-]?\d+)")
SEPARATOR = "|"


def parse(value_str: str) -> list[int]:
    """Parse a ``|``-separated list of integers.

    Parsing stops silently at the first token that is not an integer, so
    any valid prefix is returned.
    """
    values: list[int] = []
    pos = 0
    while True:
        match = _INTEGER.match(value_str, pos)
        if match is None:
            break
        values.append(int(match.group(1)))
        pos = match.end()
        if value_str.startswith(SEPARATOR, pos):
            pos += len(SEPARATOR)
    return values


def _default_path() -> Path:
    return Path.home() / "tmp_flaschenorgel.txt"


@dataclass
class SensorReader:
    """Reads the most recent sensor values from a text file."""

    path: Path = field(default_factory=_default_path)

    def read(self) -> list[int]:
        """Return the values from the last whitespace-separated token of the file.

        Raises ``OSError`` if the file cannot be opened.
        """
        text = Path(self.path).read_text()
        tokens = text.split()
        for token in tokens:
            logger.debug("Value: %s", token)
        if not tokens:
            return []
        return parse(tokens[-1])