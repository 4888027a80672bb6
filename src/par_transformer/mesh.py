"""
Mesh — Grid Coordinates, Nodes and Cells
=========================================
The discrete coordinate system over which correction parameters are
defined.

Classes:
    MeshCoord   One axis of a node: ``(first, second, third)`` digits.
    MeshNode    A grid intersection, ``(latitude, longitude)`` MeshCoords,
                encoded as an 8-digit meshcode.
    MeshCell    The four nodes surrounding a point, plus the mesh unit.

A latitude coordinate covers ``[0, 100)`` in units of 2/3 degree, a
longitude coordinate covers ``[100, 180]`` degrees.  The third digit
counts 1/80 of a first-digit step, so mesh unit 1 steps by one third digit
and mesh unit 5 by five.

Usage::

    from par_transformer.mesh import MeshCell, MeshNode

    node = MeshNode.from_meshcode(54401027)
    cell = MeshCell.from_mesh_node(node, mesh_unit=1)
    cell.north_east.to_meshcode()  # 54401038
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Literal

from par_transformer.exceptions import (
    InvalidValueError,
    MeshCellError,
    MeshOverflowError,
    MeshUnitError,
)
from par_transformer.utils import is_odd_bits, next_up
from par_transformer.validators import Validators

if TYPE_CHECKING:
    from par_transformer.point import Point

MeshUnit = Literal[1, 5]

MESHCODE_MAX = 100_00_00_00


def is_meshcode(value: object) -> bool:
    """Return ``True`` if *value* is an int that decodes to a valid node.

    Example::

        is_meshcode(54401027)   # True
        is_meshcode(10810000)   # False, longitude first digit 81
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    try:
        MeshNode.from_meshcode(value)
    except InvalidValueError:
        return False
    return True


# ---------------------------------------------------------------------------
# MeshCoord
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class MeshCoord:
    """One axis of a mesh node.

    Ordering is lexicographic over ``(first, second, third)``.

    Attributes:
        first: 0 to 99.
        second: 0 to 7.
        third: 0 to 9.
    """

    first: int
    second: int
    third: int

    FIRST_MIN: ClassVar[int] = 0
    FIRST_MAX: ClassVar[int] = 99
    SECOND_MIN: ClassVar[int] = 0
    SECOND_MAX: ClassVar[int] = 7
    THIRD_MIN: ClassVar[int] = 0
    THIRD_MAX: ClassVar[int] = 9

    def __post_init__(self) -> None:
        Validators.assert_digit_in_range("first", self.first, self.FIRST_MIN, self.FIRST_MAX)
        Validators.assert_digit_in_range("second", self.second, self.SECOND_MIN, self.SECOND_MAX)
        Validators.assert_digit_in_range("third", self.third, self.THIRD_MIN, self.THIRD_MAX)

    # ------------------------------------------------------------------
    # Construction from degrees
    # ------------------------------------------------------------------

    @classmethod
    def _from_degree(cls, degree: float, mesh_unit: MeshUnit) -> MeshCoord:
        integer = math.floor(degree)

        first = integer % 100
        second = math.floor(8.0 * degree) - 8 * integer
        third = math.floor(80.0 * degree) - 80 * integer - 10 * second

        if mesh_unit == 5:
            third = 0 if third < 5 else 5
        return cls(first, second, third)

    @classmethod
    def from_latitude(cls, degree: float, mesh_unit: MeshUnit) -> MeshCoord:
        """Quantize a latitude to the coordinate of its southern node.

        The scaled value ``1.5 * degree`` is stepped up by one ulp when the
        last mantissa bit of *degree* is set, so that node latitudes quantize
        to their own node.

        Args:
            degree: Latitude in degrees.
            mesh_unit: ``1`` or ``5``.

        Raises:
            InvalidValueError: If the latitude falls outside ``[0, 66.666…)``
                or *mesh_unit* is unsupported.
        """
        Validators.assert_mesh_unit(mesh_unit)

        value = 3.0 * degree / 2.0
        if is_odd_bits(degree):
            value = next_up(value)

        if not 0.0 <= value < 100.0:
            raise InvalidValueError(f"latitude out of the mesh range: {degree!r}")

        return cls._from_degree(value, mesh_unit)

    @classmethod
    def from_longitude(cls, degree: float, mesh_unit: MeshUnit) -> MeshCoord:
        """Quantize a longitude to the coordinate of its western node.

        Raises:
            InvalidValueError: If *degree* is outside ``[100, 180]`` or
                *mesh_unit* is unsupported.
        """
        Validators.assert_mesh_unit(mesh_unit)

        if not 100.0 <= degree <= 180.0:
            raise InvalidValueError(f"longitude out of the mesh range: {degree!r}")

        return cls._from_degree(degree, mesh_unit)

    # ------------------------------------------------------------------
    # Conversion to degrees
    # ------------------------------------------------------------------

    def _to_degree(self) -> float:
        return self.first + self.second / 8.0 + self.third / 80.0

    def to_latitude(self) -> float:
        """Return the latitude in degrees of this coordinate."""
        return 2.0 * self._to_degree() / 3.0

    def to_longitude(self) -> float:
        """Return the longitude in degrees of this coordinate."""
        return 100.0 + self._to_degree()

    # ------------------------------------------------------------------
    # Mesh arithmetic
    # ------------------------------------------------------------------

    def is_mesh_unit(self, mesh_unit: MeshUnit) -> bool:
        """Return ``True`` if this coordinate lies on the *mesh_unit* grid.

        Raises:
            InvalidValueError: If *mesh_unit* is not 1 or 5.
        """
        Validators.assert_mesh_unit(mesh_unit)
        return mesh_unit == 1 or self.third % mesh_unit == 0

    def next_up(self, mesh_unit: MeshUnit) -> MeshCoord:
        """Return the next coordinate northward / eastward.

        Raises:
            MeshUnitError: If ``self`` is not on the *mesh_unit* grid.
            MeshOverflowError: If ``self`` is the last coordinate.
        """
        if not self.is_mesh_unit(mesh_unit):
            raise MeshUnitError(mesh_unit, repr(self))

        bound = 9 if mesh_unit == 1 else 5

        if self.third == bound:
            if self.second == self.SECOND_MAX:
                if self.first == self.FIRST_MAX:
                    raise MeshOverflowError("next_up")
                return MeshCoord(self.first + 1, self.SECOND_MIN, self.THIRD_MIN)
            return MeshCoord(self.first, self.second + 1, self.THIRD_MIN)
        return MeshCoord(self.first, self.second, self.third + mesh_unit)

    def next_down(self, mesh_unit: MeshUnit) -> MeshCoord:
        """Return the next coordinate southward / westward.

        Raises:
            MeshUnitError: If ``self`` is not on the *mesh_unit* grid.
            MeshOverflowError: If ``self`` is ``MeshCoord(0, 0, 0)``.
        """
        if not self.is_mesh_unit(mesh_unit):
            raise MeshUnitError(mesh_unit, repr(self))

        bound = 9 if mesh_unit == 1 else 5

        if self.third == self.THIRD_MIN:
            if self.second == self.SECOND_MIN:
                if self.first == self.FIRST_MIN:
                    raise MeshOverflowError("next_down")
                return MeshCoord(self.first - 1, self.SECOND_MAX, bound)
            return MeshCoord(self.first, self.second - 1, bound)
        return MeshCoord(self.first, self.second, self.third - mesh_unit)


# ---------------------------------------------------------------------------
# MeshNode
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MeshNode:
    """A mesh node, i.e. an intersection of the grid.

    Attributes:
        latitude: Latitude coordinate.
        longitude: Longitude coordinate, at most ``MeshCoord(80, 0, 0)``
                   (180 degrees east).
    """

    latitude: MeshCoord
    longitude: MeshCoord

    LATITUDE_MIN: ClassVar[MeshCoord] = MeshCoord(0, 0, 0)
    LATITUDE_MAX: ClassVar[MeshCoord] = MeshCoord(99, 7, 9)
    LONGITUDE_MIN: ClassVar[MeshCoord] = MeshCoord(0, 0, 0)
    LONGITUDE_MAX: ClassVar[MeshCoord] = MeshCoord(80, 0, 0)

    def __post_init__(self) -> None:
        if self.LONGITUDE_MAX < self.longitude:
            raise InvalidValueError(
                f"longitude must be at most {self.LONGITUDE_MAX!r}, got {self.longitude!r}"
            )

    @classmethod
    def from_meshcode(cls, meshcode: int) -> MeshNode:
        """Decode an 8-digit meshcode.

        Raises:
            InvalidValueError: If *meshcode* is not an int in ``[0, 10**8)``
                or decodes to out-of-range digits.

        Example::

            MeshNode.from_meshcode(54401027)
            # MeshNode(latitude=MeshCoord(54, 1, 2), longitude=MeshCoord(40, 0, 7))
        """
        if isinstance(meshcode, bool) or not isinstance(meshcode, int):
            raise InvalidValueError(f"meshcode must be an integer, got {meshcode!r}")
        if not 0 <= meshcode < MESHCODE_MAX:
            raise InvalidValueError(f"meshcode out of range: {meshcode}")

        lat_first, rest = divmod(meshcode, 100_00_00)
        lng_first, rest = divmod(rest, 100_00)

        lat_second, rest = divmod(rest, 10_00)
        lng_second, rest = divmod(rest, 100)

        lat_third, lng_third = divmod(rest, 10)

        return cls(
            MeshCoord(lat_first, lat_second, lat_third),
            MeshCoord(lng_first, lng_second, lng_third),
        )

    @classmethod
    def from_point(cls, point: Point, mesh_unit: MeshUnit) -> MeshNode:
        """Return the south-west node of the cell containing *point*."""
        latitude = MeshCoord.from_latitude(point.latitude, mesh_unit)
        longitude = MeshCoord.from_longitude(point.longitude, mesh_unit)
        return cls(latitude, longitude)

    def is_mesh_unit(self, mesh_unit: MeshUnit) -> bool:
        """Return ``True`` if both axes lie on the *mesh_unit* grid."""
        return self.latitude.is_mesh_unit(mesh_unit) and self.longitude.is_mesh_unit(
            mesh_unit
        )

    def to_meshcode(self) -> int:
        """Encode this node as an 8-digit meshcode."""
        return (
            (self.latitude.first * 100 + self.longitude.first) * 100_00
            + (self.latitude.second * 10 + self.longitude.second) * 100
            + (self.latitude.third * 10 + self.longitude.third)
        )

    def to_point(self) -> Point:
        """Return the position of this node with altitude 0.0."""
        from par_transformer.point import Point  # noqa: PLC0415

        return Point.from_mesh_node(self)


# ---------------------------------------------------------------------------
# MeshCell
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MeshCell:
    """The unit cell of the mesh, bounded by four adjacent nodes.

    Direct construction checks that every corner lies on the *mesh_unit*
    grid and that ``south_east``, ``north_west`` and ``north_east`` are the
    successors of ``south_west`` along longitude, latitude and both.

    Raises:
        InvalidValueError: If *mesh_unit* is not 1 or 5.
        MeshUnitError: If a corner is not on the *mesh_unit* grid.
        MeshCellError: If the corners are not adjacent.
    """

    south_west: MeshNode
    south_east: MeshNode
    north_west: MeshNode
    north_east: MeshNode
    mesh_unit: MeshUnit

    def __post_init__(self) -> None:
        Validators.assert_mesh_unit(self.mesh_unit)

        for label, node in (
            ("south west", self.south_west),
            ("south east", self.south_east),
            ("north west", self.north_west),
            ("north east", self.north_east),
        ):
            if not node.is_mesh_unit(self.mesh_unit):
                raise MeshUnitError(self.mesh_unit, label)

        next_latitude = self.south_west.latitude.next_up(self.mesh_unit)
        next_longitude = self.south_west.longitude.next_up(self.mesh_unit)

        if self.north_west != MeshNode(next_latitude, self.south_west.longitude):
            raise MeshCellError("north west is not adjacent to south west")
        if self.south_east != MeshNode(self.south_west.latitude, next_longitude):
            raise MeshCellError("south east is not adjacent to south west")
        if self.north_east != MeshNode(next_latitude, next_longitude):
            raise MeshCellError("north east is not adjacent to south west")

    @classmethod
    def from_meshcode(cls, meshcode: int, mesh_unit: MeshUnit) -> MeshCell:
        """Return the cell whose south-west corner is *meshcode*."""
        return cls.from_mesh_node(MeshNode.from_meshcode(meshcode), mesh_unit)

    @classmethod
    def from_mesh_node(cls, node: MeshNode, mesh_unit: MeshUnit) -> MeshCell:
        """Return the cell whose south-west corner is *node*.

        Raises:
            MeshUnitError: If *node* is not on the *mesh_unit* grid.
            MeshOverflowError: If *node* has no successor.
            InvalidValueError: If the eastern nodes pass 180 degrees.
        """
        next_latitude = node.latitude.next_up(mesh_unit)
        next_longitude = node.longitude.next_up(mesh_unit)

        return cls(
            south_west=node,
            south_east=MeshNode(node.latitude, next_longitude),
            north_west=MeshNode(next_latitude, node.longitude),
            north_east=MeshNode(next_latitude, next_longitude),
            mesh_unit=mesh_unit,
        )

    @classmethod
    def from_point(cls, point: Point, mesh_unit: MeshUnit) -> MeshCell:
        """Return the cell containing *point*."""
        return cls.from_mesh_node(MeshNode.from_point(point, mesh_unit), mesh_unit)

    def position(self, point: Point) -> tuple[float, float]:
        """Return the cell-local position ``(y, x)`` of *point*.

        ``y`` runs from the southern (0) to the northern (1) edge and ``x``
        from the western (0) to the eastern (1) edge.  The altitude is
        ignored.
        """
        latitude = point.latitude - self.south_west.latitude.to_latitude()
        longitude = point.longitude - self.south_west.longitude.to_longitude()

        if self.mesh_unit == 1:
            return 120.0 * latitude, 80.0 * longitude
        return 24.0 * latitude, 16.0 * longitude
