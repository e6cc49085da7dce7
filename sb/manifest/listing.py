"""Line tokenizer for machine-generated directory listings.

Mirror listings (Apache/nginx autoindex pages) put one entry per line:

    <a href="Blender4.0/">Blender4.0/</a>            13-Nov-2023 16:08    -
    <a href="blender-4.0.2-linux-x64.tar.xz">blender-4.0.2-linux-x64.tar.xz</a>  ...

The listing is not parsed as HTML. A line is selected when it contains a
token matching ``pattern``; its entry text is the part of the first
``>``-delimited field that precedes ``end``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["LineTokenizer", "extract_between"]


def extract_between(line: str, start: str, end: str) -> str | None:
    """Return the text after the first ``start`` and before the next ``end``.

    The candidate field stops at the second occurrence of ``start``; within
    it everything up to ``end`` is returned (the whole field if ``end`` is
    absent). Returns None if ``start`` does not occur.

    >>> extract_between('<a href="x/">Blender4.0/</a>', ">", "/<")
    'Blender4.0'
    """
    fields = line.split(start)
    if len(fields) < 2:
        return None
    return fields[1].split(end, 1)[0]


@dataclass(frozen=True, slots=True)
class LineTokenizer:
    """Selects matching lines and extracts one delimited entry from each.

    Attributes:
        pattern: Token a line must contain (unanchored search)
        start: Opening delimiter
        end: Closing delimiter
    """

    pattern: re.Pattern[str]
    start: str = ">"
    end: str = "<"

    def entries(self, text: str) -> list[str]:
        """Extract entries from every matching line, in listing order.

        Matching lines without the opening delimiter are skipped.
        """
        out: list[str] = []
        for line in text.splitlines():
            if not self.pattern.search(line):
                continue
            entry = extract_between(line, self.start, self.end)
            if entry is not None:
                out.append(entry)
        return out
