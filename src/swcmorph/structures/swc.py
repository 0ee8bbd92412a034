import logging
from typing import Dict, List, Optional, Set, Tuple

from ..constants import NO_PARENT, SOMA
from .morphology import Morphology
from .section import Section

logger = logging.getLogger(__name__)

SwcRow = Tuple[int, int, float, float, float, float, int]


class SWCFile:
    def __init__(self, filename: str):
        self.filename: str = filename
        self.data: List[SwcRow] = []

    def add_point(
        self,
        identity: int,
        structure_type: int,
        x: float,
        y: float,
        z: float,
        radius: float,
        parent_identity: int
    ) -> None:
        if identity <= 0 or parent_identity >= identity or (parent_identity != NO_PARENT and parent_identity <= 0):
            raise ValueError(
                f"Invalid identity or parent_identity values: identity {identity}, parent {parent_identity}"
            )
        self.data.append((identity, structure_type, x, y, z, radius, parent_identity))

    def to_text(self) -> str:
        lines = ["# SWC written by swcmorph"]
        for point in sorted(self.data):
            lines.append(" ".join(map(str, point)))
        return "\n".join(lines) + "\n"

    def write_file(self) -> bool:
        with open(self.filename, "w") as file:
            file.write(self.to_text())
        logger.info(f"SWC saved at: {self.filename}")
        return True

    @classmethod
    def from_morphology(cls, morphology: Morphology, filename: str) -> "SWCFile":
        """
        Flattens a morphology back into SWC points.

        The soma points are chained one after the other. Each section then adds
        its points after the first one, since the first point is the last point
        of the parent section (or a soma point for sections attached to the soma).
        An orphan section whose first point matches no soma point gets a root point
        of its own, shared with the other orphans starting at the same position.

        Args:
            morphology (Morphology): The morphology to write.
            filename (str): Where `write_file` will save it.

        Returns:
            SWCFile: The filled SWC file, not written yet.
        """
        swc = cls(filename)
        next_id = 1
        anchors: Dict[Tuple[float, ...], int] = {}

        soma = morphology.soma
        if soma is not None:
            parent = NO_PARENT
            for point in soma.points:
                swc.add_point(next_id, SOMA, *point.tolist(), soma.radius, parent)
                anchors.setdefault(tuple(point.tolist()), next_id)
                parent = next_id
                next_id += 1

        # (section, id of the point it grows from), None for sections attached to the soma
        stack: List[Tuple[Section, Optional[int]]] = [
            (section, None) for section in reversed(morphology.get_orphan_sections())
        ]
        written: Set[int] = set()

        while stack:
            section, anchor = stack.pop()
            if section.id in written:
                logger.warning(f"Section {section.id} is reached twice, the section tree has a cycle.")
                continue
            written.add(section.id)

            # an empty section writes nothing, its children grow from the same point
            if len(section.points) > 0:
                if anchor is None:
                    first = tuple(section.points[0].tolist())
                    anchor = anchors.get(first)
                    if anchor is None:
                        swc.add_point(next_id, section.type_value, *first, float(section.radiuses[0]), NO_PARENT)
                        anchors[first] = anchor = next_id
                        next_id += 1

                for point, radius in zip(section.points[1:], section.radiuses[1:]):
                    swc.add_point(next_id, section.type_value, *point.tolist(), float(radius), anchor)
                    anchor = next_id
                    next_id += 1

            stack.extend((child, anchor) for child in reversed(morphology.get_children(section)))

        logger.debug(f"{len(swc.data)} SWC points made from {morphology.number_of_sections} sections.")
        return swc
