"""
The soma (cell body) of a morphology.

A soma can be a single point with a radius or a handful of points, usually a
flat contour drawn around the cell body.
"""

from typing import Any, Dict, Optional, Sequence

import numpy as np

from ..constants import SOMA, SOMA_ID, type_name


class Soma:
    """
    Cell body described by a list of 3D points and a single radius.

    Args:
        points: Sequence of (x, y, z) coordinates.
        radius (float): Representative radius of the cell body.
        soma_id (int): Identifier, `SOMA_ID` unless built from raw data that says otherwise.
    """

    def __init__(self, points: Sequence[Sequence[float]], radius: float, soma_id: int = SOMA_ID):
        self.id = soma_id
        self.type_value = SOMA
        self.type_name = type_name(SOMA)
        self.radius = float(radius)

        self.points = np.array(points, dtype=float).reshape(-1, 3)
        self.points.setflags(write=False)

    def __repr__(self) -> str:
        return f"Soma(id={self.id}, points={len(self.points)}, radius={self.radius})"

    def get_center(self) -> Optional[np.ndarray]:
        """
        Returns the center of the soma: the point itself when there is only one,
        the average of all the points otherwise, None when there is no point.
        """
        if len(self.points) == 0:
            return None
        if len(self.points) == 1:
            return self.points[0].copy()
        return self.points.mean(axis=0)

    def to_raw(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type_name,
            "radius": self.radius,
            "points": [{"position": p.tolist()} for p in self.points],
        }

    @classmethod
    def from_raw(cls, raw_soma: Dict[str, Any]) -> "Soma":
        return cls(
            points=[p["position"] for p in raw_soma["points"]],
            radius=raw_soma["radius"],
            soma_id=raw_soma.get("id", SOMA_ID),
        )
