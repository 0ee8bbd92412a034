"""
Reconstruction of sections from the SWC node tree.

A section is a maximal chain of nodes of a single type. It starts right after
the soma boundary or a fork and stops at the next fork, at a leaf, or at a
change of type. Each section repeats the last node of its parent (the fork
node, or the soma node it grows from) as its first point so that sections
are geometrically continuous.
"""

import logging
from typing import List, Optional, Tuple

from ..structures.node_graph import NodeGraph
from ..structures.section import Section

logger = logging.getLogger(__name__)


def find_entry_node(graph: NodeGraph) -> Optional[int]:
    """
    Finds the first node (in registration order) that has non-soma children.
    This is where the branching tree leaves the soma.
    """
    for node_id in graph.node_ids():
        if graph.non_soma_children(node_id):
            return node_id
    return None


def dive(graph: NodeGraph, start_id: int, node_list: List[int]) -> List[int]:
    """
    Follows the children from `start_id` as long as the chain is unbranched and
    keeps the same type, appending every visited node to `node_list`.

    Args:
        graph (NodeGraph): The node tree.
        start_id (int): First node of the chain.
        node_list (List[int]): Receives the visited node ids. Only appended to.

    Returns:
        List[int]: The nodes where new sections start: empty at a leaf, all the
        non-soma children at a fork. Also empty when the single child has another
        type; the branch is then not followed any further.
    """
    current = start_id
    while True:
        node_list.append(current)
        children = graph.non_soma_children(current)

        # a leaf or a fork, both end the section
        if len(children) != 1:
            return children

        child = children[0]
        if graph.type_of(child) != graph.type_of(current):
            logger.warning(
                f"Non-soma node (id:{current} type:{graph.type_of(current)}) has a single child "
                f"of different type (id:{child} type:{graph.type_of(child)}). Branch truncated."
            )
            return []

        current = child


def reconstruct_sections(graph: NodeGraph) -> List[Section]:
    """
    Builds all the sections of the tree, gives them ids and links parents and
    children.

    The sections are built from a stack, depth first. Section ids follow the
    build order, so the sibling sections of a fork get their ids in the reverse
    order of the children in the point table.

    Args:
        graph (NodeGraph): The node tree.

    Returns:
        List[Section]: The sections, indexed by their id.
    """
    entry_node = find_entry_node(graph)
    if entry_node is None:
        logger.warning("No valid section here: no node has non-soma children.")
        return []

    sections: List[Section] = []
    stack: List[Tuple[int, Optional[int]]] = [
        (child, None) for child in graph.non_soma_children(entry_node)
    ]

    while stack:
        start_id, parent_section_id = stack.pop()
        section, next_nodes = _build_section(graph, start_id, parent_section_id, len(sections))
        sections.append(section)

        # parents are always built before their children
        if parent_section_id is not None:
            sections[parent_section_id].add_child(section.id)

        for node_id in next_nodes:
            stack.append((node_id, section.id))

    logger.info(f"Reconstructed {len(sections)} sections from {len(graph)} nodes.")
    return sections


def _build_section(
    graph: NodeGraph, start_id: int, parent_section_id: Optional[int], section_id: int
) -> Tuple[Section, List[int]]:
    node_list: List[int] = []

    # start from the parent node so the section is attached to what it grows from
    parent_node = graph.parent_of(start_id)
    if parent_node is not None:
        node_list.append(parent_node)

    next_nodes = dive(graph, start_id, node_list)

    radiuses = [graph.radius_of(n) for n in node_list]
    # the first point of a root section sits on the soma, its radius is not a branch radius
    if parent_section_id is None and radiuses:
        radiuses[0] = 0.0

    section = Section(
        section_id=section_id,
        type_value=graph.type_of(start_id),
        points=[graph.position_of(n) for n in node_list],
        radiuses=radiuses,
        parent_id=parent_section_id,
    )
    return section, next_nodes
