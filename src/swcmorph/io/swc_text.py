"""
Decoding of SWC text into point records.

The reader is lenient: comments, blank lines and lines that do not hold the
seven expected fields are dropped without failing the whole document, and
integer fields written as floats (e.g. "1.0") are accepted.
"""

import logging
import math
import re
from pathlib import Path
from typing import List, NamedTuple, Optional, Union

from ..constants import MIN_FIELDS

logger = logging.getLogger(__name__)

_COMMENT = re.compile(r"#.*$", re.MULTILINE)
_SEPARATOR = re.compile(r"[\s,]+")


class PointRecord(NamedTuple):
    """One line of an SWC file."""

    id: int
    type: int
    x: float
    y: float
    z: float
    radius: float
    parent_id: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_line(line: str) -> Optional[PointRecord]:
    """
    Parses a single comment-free SWC line.

    Returns:
        The point record, or None if the line does not hold 7 numeric fields.
    """
    tokens = _SEPARATOR.split(line.strip())
    if len(tokens) < MIN_FIELDS:
        return None

    try:
        values = [float(token) for token in tokens[:MIN_FIELDS]]
        return PointRecord(
            id=_round_half_up(values[0]),
            type=_round_half_up(values[1]),
            x=values[2],
            y=values[3],
            z=values[4],
            radius=values[5],
            parent_id=_round_half_up(values[6]),
        )
    except (ValueError, OverflowError):
        return None


def parse_points(swc_text: str) -> List[PointRecord]:
    """
    Extracts all the points of an SWC document, in file order.

    Args:
        swc_text (str): The text content of an SWC file.

    Returns:
        List[PointRecord]: The accepted points. Lines with fewer than 7 parseable
        fields are skipped.
    """
    points = []
    text = _COMMENT.sub("", swc_text)

    for line_number, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        point = parse_line(line)
        if point is None:
            logger.debug(f"Skipping line {line_number}: not a valid SWC point ({line.strip()!r})")
            continue
        points.append(point)

    return points


def read_swc_file(path: Union[str, Path]) -> str:
    """Reads the text content of an SWC file."""
    path = Path(path)
    logger.info(f"Reading {path}")
    return path.read_text(encoding="utf-8")
