"""
Tests — Mesh
=============
Unit tests for :mod:`par_transformer.mesh` and :mod:`par_transformer.utils`.

Test strategy:
- Digit bounds, ordering and successor arithmetic of MeshCoord.
- Degree round trips over the full digit domain.
- Meshcode codec and cell adjacency.
"""

from __future__ import annotations

import math
import struct
import sys

import pytest

from par_transformer.exceptions import (
    InvalidValueError,
    MeshCellError,
    MeshOverflowError,
    MeshUnitError,
)
from par_transformer.mesh import MeshCell, MeshCoord, MeshNode, is_meshcode
from par_transformer.point import Point
from par_transformer.utils import is_odd_bits, next_up


# ---------------------------------------------------------------------------
# Float helpers
# ---------------------------------------------------------------------------


class TestFloatHelpers:
    """IEEE-754 helpers used by latitude quantization."""

    def test_next_up_special_values(self) -> None:
        assert math.isnan(next_up(math.nan))
        assert next_up(math.inf) == math.inf
        assert next_up(-math.inf) == -sys.float_info.max
        assert next_up(sys.float_info.max) == math.inf

    def test_next_up_finite(self) -> None:
        assert next_up(1.0) == 1.0000000000000002
        assert next_up(-1.0) == -0.9999999999999999
        assert next_up(-sys.float_info.max) == -1.7976931348623155e308

    def test_next_up_zero_is_smallest_subnormal(self) -> None:
        assert next_up(0.0) == 5e-324
        assert next_up(-0.0) == 5e-324

    def test_is_odd_bits(self) -> None:
        assert is_odd_bits(0.0) is False
        odd = struct.unpack(">d", struct.pack(">Q", 1))[0]
        assert is_odd_bits(odd) is True
        assert is_odd_bits(1.0) is False
        assert is_odd_bits(next_up(1.0)) is True


# ---------------------------------------------------------------------------
# MeshCoord
# ---------------------------------------------------------------------------


class TestMeshCoord:
    """Construction, ordering and arithmetic of MeshCoord."""

    def test_valid_bounds(self) -> None:
        coord = MeshCoord(99, 7, 9)
        assert (coord.first, coord.second, coord.third) == (99, 7, 9)

    @pytest.mark.parametrize(
        "digits",
        [(0, 0, 10), (0, 8, 0), (100, 0, 0), (0, 0, -1), (0, -1, 0), (-1, 0, 0)],
    )
    def test_out_of_range_raises(self, digits: tuple[int, int, int]) -> None:
        with pytest.raises(InvalidValueError):
            MeshCoord(*digits)

    def test_non_integer_digit_raises(self) -> None:
        with pytest.raises(InvalidValueError):
            MeshCoord(1.0, 0, 0)  # type: ignore[arg-type]

    def test_ordering(self) -> None:
        coord = MeshCoord(0, 0, 1)

        assert coord == MeshCoord(0, 0, 1)
        assert coord != MeshCoord(0, 0, 2)

        assert coord < MeshCoord(0, 0, 2)
        assert not coord < MeshCoord(0, 0, 1)
        assert coord <= MeshCoord(0, 0, 1)
        assert not coord <= MeshCoord(0, 0, 0)

        assert coord > MeshCoord(0, 0, 0)
        assert not coord > MeshCoord(0, 0, 1)
        assert coord >= MeshCoord(0, 0, 1)
        assert not coord >= MeshCoord(0, 0, 2)

        assert MeshCoord(0, 1, 0) > MeshCoord(0, 0, 9)
        assert MeshCoord(1, 0, 0) > MeshCoord(0, 7, 9)

    def test_is_mesh_unit(self) -> None:
        assert MeshCoord(0, 0, 3).is_mesh_unit(1)
        assert MeshCoord(0, 0, 5).is_mesh_unit(5)
        assert not MeshCoord(0, 0, 3).is_mesh_unit(5)
        with pytest.raises(InvalidValueError):
            MeshCoord(0, 0, 0).is_mesh_unit(2)  # type: ignore[arg-type]

    def test_next_up_carries(self) -> None:
        assert MeshCoord(0, 0, 0).next_up(1) == MeshCoord(0, 0, 1)
        assert MeshCoord(0, 0, 9).next_up(1) == MeshCoord(0, 1, 0)
        assert MeshCoord(0, 7, 9).next_up(1) == MeshCoord(1, 0, 0)
        assert MeshCoord(0, 0, 0).next_up(5) == MeshCoord(0, 0, 5)
        assert MeshCoord(0, 0, 5).next_up(5) == MeshCoord(0, 1, 0)
        assert MeshCoord(0, 7, 5).next_up(5) == MeshCoord(1, 0, 0)

    def test_next_down_borrows(self) -> None:
        assert MeshCoord(0, 0, 1).next_down(1) == MeshCoord(0, 0, 0)
        assert MeshCoord(0, 1, 0).next_down(1) == MeshCoord(0, 0, 9)
        assert MeshCoord(1, 0, 0).next_down(1) == MeshCoord(0, 7, 9)
        assert MeshCoord(0, 1, 0).next_down(5) == MeshCoord(0, 0, 5)
        assert MeshCoord(1, 0, 0).next_down(5) == MeshCoord(0, 7, 5)

    @pytest.mark.parametrize("third", [1, 2, 3, 4, 6, 7, 8, 9])
    def test_unit_mismatch_raises(self, third: int) -> None:
        with pytest.raises(MeshUnitError):
            MeshCoord(0, 0, third).next_up(5)
        with pytest.raises(MeshUnitError):
            MeshCoord(0, 0, third).next_down(5)

    def test_overflow_raises(self) -> None:
        with pytest.raises(MeshOverflowError):
            MeshCoord(99, 7, 9).next_up(1)
        with pytest.raises(MeshOverflowError):
            MeshCoord(99, 7, 5).next_up(5)
        with pytest.raises(MeshOverflowError):
            MeshCoord(0, 0, 0).next_down(1)
        with pytest.raises(MeshOverflowError):
            MeshCoord(0, 0, 0).next_down(5)

    def test_from_degree(self) -> None:
        assert MeshCoord.from_latitude(36.10377479, 1) == MeshCoord(54, 1, 2)
        assert MeshCoord.from_latitude(36.10377479, 5) == MeshCoord(54, 1, 0)
        assert MeshCoord.from_longitude(140.087855041, 1) == MeshCoord(40, 0, 7)
        assert MeshCoord.from_longitude(140.087855041, 5) == MeshCoord(40, 0, 5)

    def test_from_degree_out_of_range(self) -> None:
        with pytest.raises(InvalidValueError):
            MeshCoord.from_latitude(-1.0, 1)
        with pytest.raises(InvalidValueError):
            MeshCoord.from_latitude(66.7, 1)
        with pytest.raises(InvalidValueError):
            MeshCoord.from_latitude(math.nan, 1)
        with pytest.raises(InvalidValueError):
            MeshCoord.from_longitude(99.9, 1)
        with pytest.raises(InvalidValueError):
            MeshCoord.from_longitude(180.1, 1)

    def test_latitude_round_trip(self) -> None:
        for first in range(100):
            for second in range(8):
                for third in range(10):
                    coord = MeshCoord(first, second, third)
                    assert MeshCoord.from_latitude(coord.to_latitude(), 1) == coord

    def test_longitude_round_trip(self) -> None:
        for first in range(80):
            for second in range(8):
                for third in range(10):
                    coord = MeshCoord(first, second, third)
                    assert MeshCoord.from_longitude(coord.to_longitude(), 1) == coord

        coord = MeshCoord(80, 0, 0)
        assert MeshCoord.from_longitude(coord.to_longitude(), 1) == coord

    def test_round_trip_unit_five(self) -> None:
        for first in range(80):
            for second in range(8):
                for third in (0, 5):
                    coord = MeshCoord(first, second, third)
                    assert MeshCoord.from_latitude(coord.to_latitude(), 5) == coord
                    assert MeshCoord.from_longitude(coord.to_longitude(), 5) == coord


# ---------------------------------------------------------------------------
# MeshNode
# ---------------------------------------------------------------------------


class TestMeshNode:
    """Meshcode codec and node bounds."""

    def test_longitude_bound(self) -> None:
        MeshNode(MeshCoord(0, 0, 0), MeshCoord(80, 0, 0))
        for longitude in (MeshCoord(80, 0, 1), MeshCoord(80, 1, 0), MeshCoord(81, 0, 0)):
            with pytest.raises(InvalidValueError):
                MeshNode(MeshCoord(0, 0, 0), longitude)

    def test_from_meshcode(self) -> None:
        node = MeshNode.from_meshcode(54401027)
        assert node.latitude == MeshCoord(54, 1, 2)
        assert node.longitude == MeshCoord(40, 0, 7)
        assert node.to_meshcode() == 54401027

    def test_from_meshcode_zero(self) -> None:
        node = MeshNode.from_meshcode(0)
        assert node == MeshNode(MeshCoord(0, 0, 0), MeshCoord(0, 0, 0))

    @pytest.mark.parametrize("meshcode", [-1, 100_000_000, 10810000, 10000800])
    def test_from_meshcode_invalid(self, meshcode: int) -> None:
        with pytest.raises(InvalidValueError):
            MeshNode.from_meshcode(meshcode)

    def test_meshcode_round_trip_sample(self) -> None:
        for meshcode in range(0, 100_000_000, 7_919):
            if is_meshcode(meshcode):
                assert MeshNode.from_meshcode(meshcode).to_meshcode() == meshcode

    def test_is_meshcode(self) -> None:
        assert is_meshcode(54401027)
        assert is_meshcode(800000)

        assert not is_meshcode(-1)
        assert not is_meshcode(100000000)
        assert not is_meshcode(10810000)
        assert not is_meshcode(10000800)
        assert not is_meshcode(None)
        assert not is_meshcode("54401027")
        assert not is_meshcode(True)

    def test_from_point(self) -> None:
        point = Point(36.10377479, 140.087855041, 5.0)
        assert MeshNode.from_point(point, 1).to_meshcode() == 54401027
        assert MeshNode.from_point(point, 5).to_meshcode() == 54401005

    def test_to_point(self) -> None:
        point = MeshNode.from_meshcode(54401027).to_point()
        assert point.latitude == pytest.approx(36.1)
        assert point.longitude == pytest.approx(140.0875)
        assert point.altitude == 0.0


# ---------------------------------------------------------------------------
# MeshCell
# ---------------------------------------------------------------------------


class TestMeshCell:
    """Cell construction, adjacency checks and local position."""

    def test_from_meshcode_unit_one(self) -> None:
        cell = MeshCell.from_meshcode(54401027, 1)
        assert cell.south_west.to_meshcode() == 54401027
        assert cell.south_east.to_meshcode() == 54401028
        assert cell.north_west.to_meshcode() == 54401037
        assert cell.north_east.to_meshcode() == 54401038
        assert cell.mesh_unit == 1

    def test_from_meshcode_unit_five(self) -> None:
        cell = MeshCell.from_meshcode(54401005, 5)
        assert cell.south_west.to_meshcode() == 54401005
        assert cell.south_east.to_meshcode() == 54401100
        assert cell.north_west.to_meshcode() == 54401055
        assert cell.north_east.to_meshcode() == 54401150

    def test_from_point(self) -> None:
        point = Point(36.10377479, 140.087855041, 5.0)
        assert MeshCell.from_point(point, 1) == MeshCell.from_meshcode(54401027, 1)
        assert point.mesh_cell(5) == MeshCell.from_meshcode(54401005, 5)

    def test_from_mesh_node_unit_mismatch(self) -> None:
        with pytest.raises(MeshUnitError):
            MeshCell.from_meshcode(54401027, 5)

    def test_direct_construction_checks_adjacency(self) -> None:
        sw = MeshNode.from_meshcode(54401027)
        se = MeshNode.from_meshcode(54401028)
        nw = MeshNode.from_meshcode(54401037)
        ne = MeshNode.from_meshcode(54401038)

        MeshCell(sw, se, nw, ne, 1)

        with pytest.raises(MeshCellError):
            MeshCell(sw, nw, se, ne, 1)
        with pytest.raises(MeshCellError):
            MeshCell(sw, se, nw, MeshNode.from_meshcode(54401039), 1)

    def test_direct_construction_checks_unit(self) -> None:
        node = MeshNode.from_meshcode(0)
        with pytest.raises(MeshUnitError):
            MeshCell(MeshNode.from_meshcode(1), node, node, node, 5)
        with pytest.raises(InvalidValueError):
            MeshCell(node, node, node, node, 2)  # type: ignore[arg-type]

    def test_position(self) -> None:
        cell = MeshCell.from_meshcode(54401027, 1)
        y, x = cell.position(Point(36.1 + 1.0 / 240.0, 140.0875 + 1.0 / 320.0))
        assert y == pytest.approx(0.5)
        assert x == pytest.approx(0.25)

        cell = MeshCell.from_meshcode(54401005, 5)
        y, x = cell.position(Point(36.0833333333333333 + 1.0 / 48.0, 140.0625))
        assert y == pytest.approx(0.5)
        assert x == pytest.approx(0.0)
