"""Core algorithms for morphology reconstruction."""

from .reconstruction import dive, find_entry_node, reconstruct_sections

__all__ = ["dive", "find_entry_node", "reconstruct_sections"]
