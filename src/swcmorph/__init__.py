"""
swcmorph - SWC Morphology reconstruction

A Python package that turns SWC neuron traces into a soma and a tree of sections.
"""

__version__ = "0.1.0"

# Core classes and functions
from .constants import SOMA_ID, type_name, type_value
from .core.reconstruction import reconstruct_sections
from .errors import MalformedTraceError, MorphologyError, SectionNotFoundError
from .io.swc_text import PointRecord, parse_points
from .processing.pipeline import SwcParser, load_swc, parse_swc
from .structures.morphology import Morphology
from .structures.node_graph import NodeGraph
from .structures.section import Section
from .structures.soma import Soma
from .structures.swc import SWCFile

__all__ = [
    "Morphology",
    "MorphologyError",
    "MalformedTraceError",
    "NodeGraph",
    "PointRecord",
    "SOMA_ID",
    "SWCFile",
    "Section",
    "SectionNotFoundError",
    "Soma",
    "SwcParser",
    "load_swc",
    "parse_points",
    "parse_swc",
    "reconstruct_sections",
    "type_name",
    "type_value",
]
