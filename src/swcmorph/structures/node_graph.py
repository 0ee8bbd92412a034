import logging
from typing import Iterable, List, Optional, Tuple

import networkx as nx
import numpy as np

from ..constants import NO_PARENT, SOMA
from ..errors import MalformedTraceError
from ..io.swc_text import PointRecord
from .soma import Soma

logger = logging.getLogger(__name__)


class NodeGraph:
    """
    The tree of SWC points, one graph node per point.

    Nodes are stored in a directed networkx graph keyed by the point id, with an
    edge from every parent to each of its children. Node attributes are 'type',
    'position', 'radius' and 'has_soma_child'. Child order is the order in which
    the children appear in the point table.

    The workflow is:
    1. Initialize with the point records, in file order.
    2. Query the tree (parents, children, soma points).
    3. Build the soma with `build_soma()`.
    """

    def __init__(self, points: Iterable[PointRecord]):
        """
        Builds the tree.

        Args:
            points (Iterable[PointRecord]): The points, every parent listed before its children.

        Raises:
            MalformedTraceError: If a point references a parent that was not listed before it.
        """
        self.graph = nx.DiGraph()
        self.soma_node_ids: List[int] = []

        for point in points:
            self._add_point(point)

        logger.debug(
            f"Node graph built with {self.graph.number_of_nodes()} nodes "
            f"({len(self.soma_node_ids)} soma nodes)."
        )

    def _add_point(self, point: PointRecord) -> None:
        if self.graph.has_node(point.id):
            logger.warning(f"Duplicate point id {point.id}, only the first one is kept.")
            return

        # networkx would silently create a missing parent when adding the edge
        if point.parent_id != NO_PARENT and not self.graph.has_node(point.parent_id):
            raise MalformedTraceError(
                f"Point {point.id} references parent {point.parent_id}, "
                "which is not defined before it."
            )

        self.graph.add_node(
            point.id,
            type=point.type,
            position=(point.x, point.y, point.z),
            radius=point.radius,
            has_soma_child=False,
        )
        if point.type == SOMA:
            self.soma_node_ids.append(point.id)

        if point.parent_id != NO_PARENT:
            self.graph.add_edge(point.parent_id, point.id)
            if point.type == SOMA:
                self.graph.nodes[point.parent_id]["has_soma_child"] = True

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, node_id: int) -> bool:
        return self.graph.has_node(node_id)

    def node_ids(self) -> List[int]:
        """All the node ids, in registration order."""
        return list(self.graph.nodes)

    def type_of(self, node_id: int) -> int:
        return self.graph.nodes[node_id]["type"]

    def position_of(self, node_id: int) -> Tuple[float, float, float]:
        return self.graph.nodes[node_id]["position"]

    def radius_of(self, node_id: int) -> float:
        return self.graph.nodes[node_id]["radius"]

    def is_soma(self, node_id: int) -> bool:
        return self.type_of(node_id) == SOMA

    def has_soma_child(self, node_id: int) -> bool:
        return self.graph.nodes[node_id]["has_soma_child"]

    def parent_of(self, node_id: int) -> Optional[int]:
        """Id of the parent node, or None for a root."""
        predecessors = list(self.graph.predecessors(node_id))
        return predecessors[0] if predecessors else None

    def children_of(self, node_id: int) -> List[int]:
        return list(self.graph.successors(node_id))

    def non_soma_children(self, node_id: int) -> List[int]:
        """Children of a node, without the soma points."""
        children = self.children_of(node_id)
        if not self.has_soma_child(node_id):
            return children
        return [child for child in children if not self.is_soma(child)]

    def build_soma(self) -> Optional[Soma]:
        """
        Makes a soma out of all the soma points, in the order they were listed.

        The radius is the largest radius among the soma points: they are usually
        all the same, but not always.

        Returns:
            Optional[Soma]: The soma, or None if the trace has no soma point.
        """
        if not self.soma_node_ids:
            return None

        positions = [self.position_of(n) for n in self.soma_node_ids]
        radius = np.max([self.radius_of(n) for n in self.soma_node_ids])
        return Soma(points=positions, radius=radius)
