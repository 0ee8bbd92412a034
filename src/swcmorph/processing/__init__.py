"""High-level parsing pipeline and command implementations."""

from .pipeline import SwcParser, load_swc, main, parse_swc, summarize_files, summarize_morphology

__all__ = ["SwcParser", "parse_swc", "load_swc", "summarize_morphology", "summarize_files", "main"]
