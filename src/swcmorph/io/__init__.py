"""Input/output functions for SWC text."""

from .swc_text import PointRecord, parse_line, parse_points, read_swc_file

__all__ = ["PointRecord", "parse_line", "parse_points", "read_swc_file"]
