"""
Format Catalog
==============
The closed set of par-file formats and the fixed-width layout of each.

Every format maps to one immutable :class:`FormatSpec`: its mesh unit,
the number of header lines and the column range of each field.  Fields
a format does not carry (e.g. latitude/longitude of ``PatchJGD_H``) have
no range and are read as ``0.0``.

``PatchJGD_HV`` is a composite of a horizontal and a vertical PatchJGD
file for the same event, laid out like ``SemiDynaEXE``.  It is parsed as
a single file; merging separate horizontal and vertical files into one
is up to the caller.

Usage::

    from par_transformer.formats import Format

    Format("TKY2JGD").mesh_unit          # 1
    Format.parse("SemiDynaEXE").spec.header  # 16
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from par_transformer.exceptions import InvalidValueError
from par_transformer.mesh import MeshUnit


@dataclass(frozen=True)
class ColumnRange:
    """Half-open column range ``[start, stop)`` of one field in a line."""

    start: int
    stop: int

    @property
    def width(self) -> int:
        return self.stop - self.start


@dataclass(frozen=True)
class FormatSpec:
    """Layout of one par-file format.

    Attributes:
        mesh_unit: Grid spacing, ``1`` or ``5``.
        header: Number of header lines preceding the records.
        meshcode: Column range of the meshcode field.
        latitude: Column range of the latitude field, or ``None``.
        longitude: Column range of the longitude field, or ``None``.
        altitude: Column range of the altitude field, or ``None``.
    """

    mesh_unit: MeshUnit
    header: int
    meshcode: ColumnRange
    latitude: ColumnRange | None
    longitude: ColumnRange | None
    altitude: ColumnRange | None

    @property
    def end_of_line(self) -> int:
        """Largest ``stop`` over the fields this format carries."""
        return max(
            r.stop
            for r in (self.meshcode, self.latitude, self.longitude, self.altitude)
            if r is not None
        )


class Format(str, Enum):
    """Supported par-file formats."""

    TKY2JGD = "TKY2JGD"
    PatchJGD = "PatchJGD"
    PatchJGD_H = "PatchJGD_H"
    PatchJGD_HV = "PatchJGD_HV"
    HyokoRev = "HyokoRev"
    SemiDynaEXE = "SemiDynaEXE"
    geonetF3 = "geonetF3"
    ITRF2014 = "ITRF2014"

    @classmethod
    def parse(cls, value: Format | str) -> Format:
        """Return the Format named *value*.

        Raises:
            InvalidValueError: If *value* names no supported format.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            supported = ", ".join(f.value for f in cls)
            raise InvalidValueError(
                f"unknown format {value!r}. Supported formats: {supported}"
            ) from None

    @property
    def spec(self) -> FormatSpec:
        return FORMAT_SPECS[self]

    @property
    def mesh_unit(self) -> MeshUnit:
        return FORMAT_SPECS[self].mesh_unit


_MESHCODE = ColumnRange(0, 8)

FORMAT_SPECS: Mapping[Format, FormatSpec] = MappingProxyType(
    {
        Format.TKY2JGD: FormatSpec(
            1, 2, _MESHCODE, ColumnRange(9, 18), ColumnRange(19, 28), None
        ),
        Format.PatchJGD: FormatSpec(
            1, 16, _MESHCODE, ColumnRange(9, 18), ColumnRange(19, 28), None
        ),
        Format.PatchJGD_H: FormatSpec(
            1, 16, _MESHCODE, None, None, ColumnRange(9, 18)
        ),
        Format.PatchJGD_HV: FormatSpec(
            1, 16, _MESHCODE, ColumnRange(9, 18), ColumnRange(19, 28), ColumnRange(29, 38)
        ),
        Format.HyokoRev: FormatSpec(
            1, 16, _MESHCODE, None, None, ColumnRange(12, 21)
        ),
        Format.SemiDynaEXE: FormatSpec(
            5, 16, _MESHCODE, ColumnRange(9, 18), ColumnRange(19, 28), ColumnRange(29, 38)
        ),
        Format.geonetF3: FormatSpec(
            5, 18, _MESHCODE, ColumnRange(12, 21), ColumnRange(22, 31), ColumnRange(32, 41)
        ),
        Format.ITRF2014: FormatSpec(
            5, 18, _MESHCODE, ColumnRange(12, 21), ColumnRange(22, 31), ColumnRange(32, 41)
        ),
    }
)


def is_format(value: object) -> bool:
    """Return ``True`` if *value* is a Format or the name of one."""
    if isinstance(value, Format):
        return True
    return isinstance(value, str) and value in Format._value2member_map_


def mesh_unit(format: Format | str) -> MeshUnit:
    """Return the mesh unit of *format*.

    Raises:
        InvalidValueError: If *format* names no supported format.
    """
    return Format.parse(format).mesh_unit
