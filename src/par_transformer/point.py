"""
Point, Correction and Parameter
================================
Plain geographic value triplets.

Classes:
    Point        A position: latitude / longitude [deg], altitude [m].
    Correction   A correction to add to a Point: [deg], [deg], [m].
    Parameter    A grid parameter as stored in a par file: [sec], [sec], [m].
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from par_transformer.mesh import MeshCell, MeshNode, MeshUnit


def _normalize_latitude(degree: float) -> float:
    if math.isnan(degree) or -90.0 <= degree <= 90.0:
        return degree

    s = math.fmod(degree, 360.0)
    if s < -270.0:
        return s + 360.0
    if 270.0 < s:
        return s - 360.0
    if s < -90.0:
        return -180.0 - s
    if 90.0 < s:
        return 180.0 - s
    return s


def _normalize_longitude(degree: float) -> float:
    if math.isnan(degree) or -180.0 <= degree <= 180.0:
        return degree

    s = math.fmod(degree, 360.0)
    if s < -180.0:
        return s + 360.0
    if 180.0 < s:
        return s - 360.0
    return s


@dataclass(frozen=True)
class Correction:
    """A correction of a :class:`Point`.

    Attributes:
        latitude: Latitude correction [deg].
        longitude: Longitude correction [deg].
        altitude: Altitude correction [m].
    """

    latitude: float
    longitude: float
    altitude: float

    def horizontal(self) -> float:
        """Return ``hypot(latitude, longitude)``."""
        return math.hypot(self.latitude, self.longitude)

    def __neg__(self) -> Correction:
        return Correction(-self.latitude, -self.longitude, -self.altitude)


@dataclass(frozen=True)
class Parameter:
    """A correction parameter at one mesh node.

    Attributes:
        latitude: Latitude parameter [sec].
        longitude: Longitude parameter [sec].
        altitude: Altitude parameter [m].
    """

    latitude: float
    longitude: float
    altitude: float

    def horizontal(self) -> float:
        """Return ``hypot(latitude, longitude)``."""
        return math.hypot(self.latitude, self.longitude)


@dataclass(frozen=True)
class Point:
    """A position on the Earth.

    No range check is made on construction; use :meth:`normalize` to bring
    latitude into ``[-90, 90]`` and longitude into ``[-180, 180]``.

    Attributes:
        latitude: Latitude [deg].
        longitude: Longitude [deg].
        altitude: Altitude [m], defaults to ``0.0``.

    Example::

        point = Point(36.10377479, 140.087855041, 50.0)
        point.to_meshcode(1)  # 54401027
        point.to_meshcode(5)  # 54401005
    """

    latitude: float
    longitude: float
    altitude: float = 0.0

    @classmethod
    def from_meshcode(cls, meshcode: int) -> Point:
        """Return the position of the node *meshcode*, altitude 0.0."""
        return cls.from_mesh_node(MeshNode.from_meshcode(meshcode))

    @classmethod
    def from_mesh_node(cls, node: MeshNode) -> Point:
        """Return the position of *node*, altitude 0.0."""
        return cls(node.latitude.to_latitude(), node.longitude.to_longitude(), 0.0)

    def to_meshcode(self, mesh_unit: MeshUnit) -> int:
        """Return the meshcode of the south-west node of the enclosing cell."""
        return self.mesh_node(mesh_unit).to_meshcode()

    def mesh_node(self, mesh_unit: MeshUnit) -> MeshNode:
        """Return the south-west node of the enclosing cell."""
        return MeshNode.from_point(self, mesh_unit)

    def mesh_cell(self, mesh_unit: MeshUnit) -> MeshCell:
        """Return the cell containing this point."""
        return MeshCell.from_point(self, mesh_unit)

    def normalize(self) -> Point:
        """Return a copy with latitude and longitude in canonical ranges.

        Latitude past a pole is reflected back (``100`` → ``80``),
        longitude is wrapped (``200`` → ``-160``).  The altitude is kept.
        """
        return Point(
            _normalize_latitude(self.latitude),
            _normalize_longitude(self.longitude),
            self.altitude,
        )

    def add(self, correction: Correction) -> Point:
        """Return this point moved by *correction*, without normalizing."""
        return Point(
            self.latitude + correction.latitude,
            self.longitude + correction.longitude,
            self.altitude + correction.altitude,
        )
