"""
A section is a polyline of the morphology between two significant points:
the soma boundary, a fork or the tip of a branch.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..constants import UNDEFINED, type_name, type_value

logger = logging.getLogger(__name__)


class Section:
    """
    An unbranched run of points of a single SWC type.

    Parent and children are stored as section ids, the `Morphology` that owns the
    section resolves them.

    Args:
        section_id (int): Identifier, unique within a morphology. 0 is valid.
        type_value (int): SWC type code of every point of the section.
        points: Sequence of (x, y, z) coordinates.
        radiuses: One radius per point.
        parent_id (Optional[int]): Id of the parent section, None if the section
            is attached to the soma.
    """

    def __init__(
        self,
        section_id: int,
        type_value: int,
        points: Sequence[Sequence[float]],
        radiuses: Sequence[float],
        parent_id: Optional[int] = None,
    ):
        self.id = section_id
        self.type_value = type_value
        self.parent_id = parent_id
        self.children_ids: List[int] = []

        self.points = np.array(points, dtype=float).reshape(-1, 3)
        self.radiuses = np.array(radiuses, dtype=float).reshape(-1)
        if len(self.points) != len(self.radiuses):
            raise ValueError(
                f"Section {section_id}: {len(self.points)} points but {len(self.radiuses)} radiuses."
            )
        self.points.setflags(write=False)
        self.radiuses.setflags(write=False)

    def __repr__(self) -> str:
        return (
            f"Section(id={self.id}, type={self.type_name}, points={len(self.points)}, "
            f"parent={self.parent_id}, children={self.children_ids})"
        )

    @property
    def type_name(self) -> str:
        return type_name(self.type_value)

    def has_parent(self) -> bool:
        return self.parent_id is not None

    def add_child(self, child_id: int) -> bool:
        """
        Registers a child section id. A section cannot be its own child and a
        child is only registered once.

        Returns:
            bool: False if the child was refused.
        """
        if child_id == self.id:
            logger.warning(f"Section {self.id} cannot be the child of itself.")
            return False
        if child_id in self.children_ids:
            logger.warning(f"Section {child_id} is already a child of section {self.id}.")
            return True
        self.children_ids.append(child_id)
        return True

    def get_size(self) -> float:
        """Length of the polyline."""
        if len(self.points) < 2:
            return 0.0
        return float(np.linalg.norm(np.diff(self.points, axis=0), axis=1).sum())

    def to_raw(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "typevalue": self.type_value,
            "typename": self.type_name,
            "points": [
                {"position": p.tolist(), "radius": float(r)} for p, r in zip(self.points, self.radiuses)
            ],
            "parent": self.parent_id,
            "children": list(self.children_ids),
        }

    @classmethod
    def from_raw(cls, raw_section: Dict[str, Any]) -> "Section":
        """
        Builds a section from its flat description, without parent nor children.
        Only one of 'typevalue' and 'typename' is needed.
        """
        value = raw_section.get("typevalue")
        if value is None:
            name = raw_section.get("typename")
            value = type_value(name) if name is not None else UNDEFINED
        raw_points = raw_section["points"]
        return cls(
            section_id=raw_section["id"],
            type_value=value,
            points=[p["position"] for p in raw_points],
            radiuses=[p.get("radius", 1.0) for p in raw_points],
        )
