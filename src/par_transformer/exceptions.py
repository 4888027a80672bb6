"""
par-transformer — Custom Exception Hierarchy
=============================================
Every error raised by the mesh, parser and transformer modules (and by the
batch tool wrapped around them) comes from this module so callers can catch
them at the right level of granularity.

Hierarchy::

    ParTransformerError                  ← catch-all base
    ├── InvalidValueError                ← out-of-range digit, bad format name, …
    ├── MeshError                        ← mesh arithmetic / geometry failures
    │   ├── MeshUnitError                ← coord not aligned to the mesh unit
    │   ├── MeshOverflowError            ← next_up / next_down left the grid
    │   └── MeshCellError                ← corners are not adjacent
    ├── ParseParError                    ← par text violates the fixed-width grammar
    ├── PointError                       ← point cannot be placed in a mesh cell
    ├── ParameterNotFoundError           ← corner meshcode absent from the map
    ├── CorrectionNotFoundError          ← Newton-Raphson did not converge
    ├── InputValidationError             ← batch tool: bad files, missing columns
    │   └── ColumnNotFoundError          ← CSV column missing
    └── OutputWriteError                 ← batch tool: cannot write output

Usage::

    from par_transformer.exceptions import ParameterNotFoundError

    raise ParameterNotFoundError("north east")
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class ParTransformerError(Exception):
    """Base exception for all par-transformer errors.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


class InvalidValueError(ParTransformerError, ValueError):
    """Raised when a constructed value violates a structural invariant.

    Examples are a mesh digit outside its range, a meshcode outside
    ``[0, 10**8)``, an unknown format name or an unsupported mesh unit.
    """


# ---------------------------------------------------------------------------
# Mesh
# ---------------------------------------------------------------------------


class MeshError(ParTransformerError):
    """Parent class for failures of mesh arithmetic and mesh geometry."""


class MeshUnitError(MeshError):
    """Raised when a mesh coordinate is not compatible with the mesh unit.

    Args:
        mesh_unit: The requested mesh unit (``1`` or ``5``).
        target: Short label of the offending value, e.g. ``"south west"``.
    """

    def __init__(self, mesh_unit: int, target: str) -> None:
        super().__init__(f"{target} is not compatible with mesh unit {mesh_unit}")
        self.mesh_unit: int = mesh_unit
        self.target: str = target


class MeshOverflowError(MeshError):
    """Raised when stepping a mesh coordinate would leave the coordinate space.

    Args:
        operation: ``"next_up"`` or ``"next_down"``.
    """

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} overflows the mesh coordinate space")
        self.operation: str = operation


class MeshCellError(MeshError):
    """Raised when the four corners of a mesh cell are not adjacent nodes."""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class ParseParError(ParTransformerError):
    """Raised when par text does not follow its format's fixed-width layout.

    Args:
        message: Human-readable description of the error.
        lineno: 1-based line number of the offending line, if any.
        field: Name of the field that failed (``"meshcode"``,
               ``"latitude"``, ``"longitude"`` or ``"altitude"``), if any.
        start: Start column of the field.
        stop: Stop column (exclusive) of the field.

    Example::

        raise ParseParError("parse error: meshcode l3:0:8",
                            lineno=3, field="meshcode", start=0, stop=8)
    """

    def __init__(
        self,
        message: str,
        *,
        lineno: int | None = None,
        field: str | None = None,
        start: int | None = None,
        stop: int | None = None,
    ) -> None:
        super().__init__(message)
        self.lineno: int | None = lineno
        self.field: str | None = field
        self.start: int | None = start
        self.stop: int | None = stop


# ---------------------------------------------------------------------------
# Transformation
# ---------------------------------------------------------------------------


class PointError(ParTransformerError):
    """Raised when a point cannot be localized into a mesh cell.

    The underlying :class:`InvalidValueError` or :class:`MeshError` is
    attached as ``__cause__``.
    """


class ParameterNotFoundError(ParTransformerError):
    """Raised when a corner of the enclosing cell is missing from the map.

    Args:
        corner: Which corner is missing, one of ``"south west"``,
                ``"south east"``, ``"north west"`` or ``"north east"``.
        meshcode: Meshcode of the missing node, if known.
    """

    def __init__(self, corner: str, meshcode: int | None = None) -> None:
        hint = f" (meshcode {meshcode})" if meshcode is not None else ""
        super().__init__(f"parameter not found: {corner}{hint}")
        self.corner: str = corner
        self.meshcode: int | None = meshcode


class CorrectionNotFoundError(ParTransformerError):
    """Raised when the backward correction does not converge.

    Args:
        iterations: Number of Newton-Raphson iterations attempted.
    """

    def __init__(self, iterations: int) -> None:
        super().__init__(
            f"correction not found: no convergence within {iterations} iterations"
        )
        self.iterations: int = iterations


# ---------------------------------------------------------------------------
# Batch tool input / output
# ---------------------------------------------------------------------------


class InputValidationError(ParTransformerError):
    """Raised when the batch tool's inputs fail pre-processing validation."""


class ColumnNotFoundError(InputValidationError):
    """Raised when an expected column is absent from the point table.

    Args:
        column: The name of the missing column.
        available: Column names that ARE present.
    """

    def __init__(self, column: str, available: list[str]) -> None:
        available_str = ", ".join(f"'{c}'" for c in available)
        super().__init__(
            f"Column '{column}' not found. Available columns: {available_str}"
        )
        self.column: str = column
        self.available: list[str] = available


class OutputWriteError(ParTransformerError):
    """Raised when the batch tool cannot write its output to disk.

    Args:
        output_path: String representation of the path that failed.
        reason: Underlying OS error message.
    """

    def __init__(self, output_path: str, reason: str) -> None:
        super().__init__(f"Failed to write output to '{output_path}': {reason}")
        self.output_path: str = output_path
        self.reason: str = reason
