"""
Reading-order recovery from positioned text fragments.

Decoders emit fragments in drawing order, not reading order. Fragments are
sorted top to bottom, clustered into lines by vertical proximity, and each
line is ordered left to right. Single-column pages only: two columns that
share baselines are interleaved into one line.
"""

import math
from typing import Any, Iterable, List, Mapping, Union

from pdfdeck.config import DEFAULT_LINE_TOLERANCE
from pdfdeck.errors import DecodeFragmentError
from pdfdeck.models import LogicalLine, TextFragment

FragmentLike = Union[TextFragment, Mapping[str, Any]]


def _usable_fragments(fragments: Iterable[FragmentLike]) -> List[TextFragment]:
    usable = []
    for raw in fragments:
        if isinstance(raw, TextFragment):
            fragment = raw
        else:
            try:
                fragment = TextFragment.from_raw(raw)
            except DecodeFragmentError:
                continue

        if not fragment.text.strip():
            continue
        if not (math.isfinite(fragment.x) and math.isfinite(fragment.y)):
            continue
        usable.append(fragment)
    return usable


def _close_group(group: List[TextFragment]) -> LogicalLine:
    ordered = sorted(group, key=lambda f: f.x)
    text = " ".join(f.text.strip() for f in ordered).strip()
    return LogicalLine(text=text, y=group[0].y, fragments=ordered)


def reconstruct_lines(
    fragments: Iterable[FragmentLike],
    tolerance: float = DEFAULT_LINE_TOLERANCE,
) -> List[LogicalLine]:
    """
    Group fragments into logical lines in reading order.

    Args:
        fragments: TextFragments or raw ``{"text", "x", "y"}`` mappings, in any
            order. Malformed mappings, blank text and non-finite coordinates
            are skipped.
        tolerance: Maximum vertical distance between a fragment and the last
            fragment added to the current line for it to join that line.

    Returns:
        Lines ordered top to bottom, each with fragments ordered by ascending x.
    """
    if not tolerance >= 0:
        raise ValueError(f"tolerance must be a number >= 0, got {tolerance}")

    # sorted() is stable: equal y keeps encounter order
    ordered = sorted(_usable_fragments(fragments), key=lambda f: -f.y)
    if not ordered:
        return []

    lines: List[LogicalLine] = []
    group = [ordered[0]]
    for fragment in ordered[1:]:
        if abs(fragment.y - group[-1].y) <= tolerance:
            group.append(fragment)
        else:
            lines.append(_close_group(group))
            group = [fragment]
    lines.append(_close_group(group))

    return [line for line in lines if line.text]


def lines_to_text(lines: Iterable[LogicalLine]) -> str:
    """Newline-joined text of the lines."""
    return "\n".join(line.text for line in lines)
