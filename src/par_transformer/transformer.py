"""
Transformer — Core Module
==========================
Provides the :class:`Transformer` class, which moves points between two
datums using the parameters of a par file.

The forward correction is a bilinear interpolation of the four corner
parameters of the mesh cell enclosing the point.  Bilinear interpolation
has no closed-form inverse, so two backward corrections are offered:

* :meth:`Transformer.backward_correction` solves
  ``point = x + forward_correction(x)`` by Newton-Raphson and agrees with
  the forward transform to :attr:`Transformer.ERROR_MAX`.
* :meth:`Transformer.backward_compat_correction` reproduces the
  single-shot approximation of the GIAJ web service.

Typical usage::

    from par_transformer import Point, Transformer

    tf = Transformer.from_string(text, format="SemiDynaEXE")
    result = tf.forward(Point(36.10377479, 140.087855041, 2.34))
    origin = tf.backward(result)
"""

from __future__ import annotations

import logging
from typing import ClassVar

from par_transformer.exceptions import (
    CorrectionNotFoundError,
    InvalidValueError,
    MeshError,
    ParameterNotFoundError,
    PointError,
)
from par_transformer.formats import Format
from par_transformer.mesh import MeshCell, MeshUnit
from par_transformer.point import Correction, Parameter, Point

logger = logging.getLogger("par_transformer.transformer")

# Parameters are in arc-seconds, points in degrees
SCALE = 3600.0


def _bilinear_interpolation(
    sw: float, se: float, nw: float, ne: float, y: float, x: float
) -> float:
    return (
        sw * (1.0 - x) * (1.0 - y)
        + se * x * (1.0 - y)
        + nw * (1.0 - x) * y
        + ne * x * y
    )


class Transformer:
    """Coordinate transformer backed by a meshcode → Parameter map.

    The map is referenced, not copied; the owner may update it between
    calls.  Nothing is cached from it.

    Args:
        format: A :class:`Format` or its name.
        parameter: Map from meshcode to :class:`Parameter`.
        description: Free text, usually the par file header.

    Raises:
        InvalidValueError: If *format* names no supported format.

    Example::

        tf = Transformer(
            "SemiDynaEXE",
            {
                54401005: Parameter(-0.00622, 0.01516, 0.0946),
                54401055: Parameter(-0.0062, 0.01529, 0.08972),
                54401100: Parameter(-0.00663, 0.01492, 0.10374),
                54401150: Parameter(-0.00664, 0.01506, 0.10087),
            },
        )
        tf.forward(Point(36.10377479, 140.087855041, 0.0))
    """

    ERROR_MAX: ClassVar[float] = 5e-14
    MAX_ITERATION: ClassVar[int] = 4

    def __init__(
        self,
        format: Format | str,
        parameter: dict[int, Parameter],
        description: str | None = None,
    ) -> None:
        self._format: Format = Format.parse(format)
        self._parameter: dict[int, Parameter] = parameter
        self._description: str | None = description

    @classmethod
    def from_string(
        cls,
        text: str,
        format: Format | str,
        description: str | None = None,
    ) -> Transformer:
        """Parse par-file *text* of the given *format*.

        Raises:
            InvalidValueError: If *format* names no supported format.
            ParseParError: If *text* is malformed.
        """
        from par_transformer.parser import Parser  # noqa: PLC0415

        return Parser.from_format(format).parse(text, description)

    # ------------------------------------------------------------------
    # Read-only attributes
    # ------------------------------------------------------------------

    @property
    def format(self) -> Format:
        return self._format

    @property
    def parameter(self) -> dict[int, Parameter]:
        return self._parameter

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def mesh_unit(self) -> MeshUnit:
        return self._format.mesh_unit

    # ------------------------------------------------------------------
    # Transformation
    # ------------------------------------------------------------------

    def transform(self, point: Point, backward: bool = False) -> Point:
        """Forward-transform *point*, or backward-transform if *backward*."""
        if backward:
            return self.backward(point)
        return self.forward(point)

    def forward(self, point: Point) -> Point:
        """Return *point* transformed to the target datum."""
        return point.add(self.forward_correction(point))

    def backward(self, point: Point) -> Point:
        """Return *point* transformed back to the source datum (exact)."""
        return point.add(self.backward_correction(point))

    def backward_compat(self, point: Point) -> Point:
        """Return *point* transformed back as the GIAJ web service does."""
        return point.add(self.backward_compat_correction(point))

    # ------------------------------------------------------------------
    # Corrections
    # ------------------------------------------------------------------

    def _mesh_cell(self, point: Point) -> MeshCell:
        try:
            return MeshCell.from_point(point, self.mesh_unit)
        except (InvalidValueError, MeshError) as exc:
            raise PointError(f"point is out-of-bounds: {point!r}") from exc

    def parameter_quadruple(
        self, cell: MeshCell
    ) -> tuple[Parameter, Parameter, Parameter, Parameter]:
        """Return the parameters at the corners of *cell*.

        Returns:
            ``(south_west, south_east, north_west, north_east)``.

        Raises:
            ParameterNotFoundError: If any corner is missing from the map.
        """
        corners = []
        for label, node in (
            ("south west", cell.south_west),
            ("south east", cell.south_east),
            ("north west", cell.north_west),
            ("north east", cell.north_east),
        ):
            meshcode = node.to_meshcode()
            try:
                corners.append(self._parameter[meshcode])
            except KeyError:
                raise ParameterNotFoundError(label, meshcode) from None

        sw, se, nw, ne = corners
        return sw, se, nw, ne

    def forward_correction(self, point: Point) -> Correction:
        """Return the correction to add to *point* for the forward transform.

        Raises:
            PointError: If *point* is outside the mesh.
            ParameterNotFoundError: If a corner of its cell has no parameter.
        """
        cell = self._mesh_cell(point)
        sw, se, nw, ne = self.parameter_quadruple(cell)
        y, x = cell.position(point)

        latitude = _bilinear_interpolation(
            sw.latitude, se.latitude, nw.latitude, ne.latitude, y, x
        )
        longitude = _bilinear_interpolation(
            sw.longitude, se.longitude, nw.longitude, ne.longitude, y, x
        )
        altitude = _bilinear_interpolation(
            sw.altitude, se.altitude, nw.altitude, ne.altitude, y, x
        )

        return Correction(latitude / SCALE, longitude / SCALE, altitude)

    def backward_compat_correction(self, point: Point) -> Correction:
        """Return the backward correction of the GIAJ web service.

        The result is not the exact inverse of :meth:`forward_correction`;
        the forward/backward round trip is good to about 1e-9 degrees and
        1e-5 metres.

        Raises:
            PointError: If a point on the way is outside the mesh.
            ParameterNotFoundError: If a cell on the way lacks a parameter.
        """
        delta = 1.0 / 300.0

        temporal = Point(point.latitude - delta, point.longitude + delta, point.altitude)
        corr = self.forward_correction(temporal)

        reference = Point(
            point.latitude - corr.latitude,
            point.longitude - corr.longitude,
            point.altitude - corr.altitude,
        )

        return -self.forward_correction(reference)

    def backward_correction(self, point: Point) -> Correction:
        """Return the exact backward correction by Newton-Raphson.

        Solves ``point = x + forward_correction(x)`` for ``x``.  The mesh
        cell and its corner parameters are those of *point* itself for every
        iteration.

        The Jacobian is taken with respect to the cell-local position, so the
        result may differ in the last bits (below 1e-17 degrees) from solvers
        that differentiate with respect to degrees.

        Raises:
            PointError: If *point* (or an iterate) is outside the mesh.
            ParameterNotFoundError: If a corner parameter is missing.
            CorrectionNotFoundError: If the Jacobian is singular, or no
                iterate is within :attr:`ERROR_MAX` after
                :attr:`MAX_ITERATION` iterations.
        """
        xn = point.longitude
        yn = point.latitude

        for iteration in range(1, self.MAX_ITERATION + 1):
            current = Point(yn, xn, 0.0)

            cell = self._mesh_cell(point)
            sw, se, nw, ne = self.parameter_quadruple(cell)
            y, x = cell.position(current)

            corr_x = (
                _bilinear_interpolation(
                    sw.longitude, se.longitude, nw.longitude, ne.longitude, y, x
                )
                / SCALE
            )
            corr_y = (
                _bilinear_interpolation(
                    sw.latitude, se.latitude, nw.latitude, ne.latitude, y, x
                )
                / SCALE
            )

            fx = point.longitude - (xn + corr_x)
            fy = point.latitude - (yn + corr_y)

            # Jacobian of (fx, fy) with respect to (x, y)
            fx_x = -1.0 - (
                (se.longitude - sw.longitude) * (1.0 - y)
                + (ne.longitude - nw.longitude) * y
            ) / SCALE
            fx_y = -(
                (nw.longitude - sw.longitude) * (1.0 - x)
                + (ne.longitude - se.longitude) * x
            ) / SCALE
            fy_x = -(
                (se.latitude - sw.latitude) * (1.0 - y)
                + (ne.latitude - nw.latitude) * y
            ) / SCALE
            fy_y = -1.0 - (
                (nw.latitude - sw.latitude) * (1.0 - x)
                + (ne.latitude - se.latitude) * x
            ) / SCALE

            det = fx_x * fy_y - fx_y * fy_x
            if det == 0.0:
                logger.debug("Newton-Raphson iteration %d: singular Jacobian", iteration)
                raise CorrectionNotFoundError(iteration)

            xn -= (fy_y * fx - fx_y * fy) / det
            yn -= (fx_x * fy - fy_x * fx) / det

            corr = self.forward_correction(Point(yn, xn, 0.0))

            delta_x = point.longitude - (xn + corr.longitude)
            delta_y = point.latitude - (yn + corr.latitude)

            logger.debug(
                "Newton-Raphson iteration %d: residual (lat=%.3e, lon=%.3e)",
                iteration,
                delta_y,
                delta_x,
            )

            if abs(delta_x) < self.ERROR_MAX and abs(delta_y) < self.ERROR_MAX:
                return -corr

        raise CorrectionNotFoundError(self.MAX_ITERATION)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        description = self._description
        if description is not None and len(description) > 10 + 3:
            description = description[:10] + "..."

        return (
            f"{self.__class__.__name__}("
            f"format={self._format.value!r}, "
            f"parameter=<{len(self._parameter)} entries>, "
            f"description={description!r})"
        )
