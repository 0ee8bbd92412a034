"""Data structures for neuron representation."""

from .morphology import Morphology
from .node_graph import NodeGraph
from .section import Section
from .soma import Soma
from .swc import SWCFile

__all__ = ["Morphology", "NodeGraph", "Section", "Soma", "SWCFile"]
