"""
par-transformer — Input Validators
===================================
Static precondition checks shared by the mesh value types and the batch
tool.

All methods raise an exception from :mod:`par_transformer.exceptions`
rather than returning booleans, so constructors and ``validate_inputs``
implementations stay flat::

    Validators.assert_digit_in_range("second", second, 0, 7)
    Validators.assert_mesh_unit(mesh_unit)
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from par_transformer.exceptions import (
    ColumnNotFoundError,
    InputValidationError,
    InvalidValueError,
    OutputWriteError,
)

MESH_UNITS: tuple[int, ...] = (1, 5)


class Validators:
    """Collection of static precondition checks.

    All methods are ``@staticmethod``; the class is a namespace and is never
    instantiated.
    """

    # ------------------------------------------------------------------
    # Mesh value checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_digit_in_range(name: str, value: int, lower: int, upper: int) -> None:
        """Assert that *value* is an integer in ``[lower, upper]``.

        Args:
            name: Label used in the error message (e.g. ``"first"``).
            value: The digit to check.
            lower: Inclusive lower bound.
            upper: Inclusive upper bound.

        Raises:
            InvalidValueError: If *value* is not an ``int`` (``bool`` is
                rejected too) or lies outside the bounds.

        Example::

            Validators.assert_digit_in_range("third", 9, 0, 9)
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidValueError(
                f"{name} must be an integer, got {type(value).__name__}"
            )
        if not lower <= value <= upper:
            raise InvalidValueError(
                f"{name} must be in [{lower}, {upper}], got {value}"
            )

    @staticmethod
    def assert_mesh_unit(mesh_unit: int) -> None:
        """Assert that *mesh_unit* is one of the supported units (1 or 5).

        Raises:
            InvalidValueError: For any other value.
        """
        if isinstance(mesh_unit, bool) or mesh_unit not in MESH_UNITS:
            raise InvalidValueError(
                f"mesh unit must be 1 or 5, got {mesh_unit!r}"
            )

    # ------------------------------------------------------------------
    # File-system checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_file_exists(path: Path) -> None:
        """Assert that *path* points to an existing regular file.

        Raises:
            InputValidationError: If *path* does not exist or is a directory.
        """
        path = Path(path)
        if not path.exists():
            raise InputValidationError(
                f"Input file not found: '{path}'. "
                "Check that the path is correct and the file exists."
            )
        if path.is_dir():
            raise InputValidationError(
                f"Expected a file but got a directory: '{path}'."
            )

    @staticmethod
    def assert_supported_extension(path: Path, extensions: Sequence[str]) -> None:
        """Assert that *path* has one of the allowed file extensions.

        Args:
            path: File path to check.
            extensions: Allowed extensions, each starting with a dot
                        (e.g. ``[".csv"]``).

        Raises:
            InputValidationError: If the suffix is not in *extensions*.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        allowed = [ext.lower() for ext in extensions]
        if suffix not in allowed:
            raise InputValidationError(
                f"Unsupported file extension '{suffix}' for '{path.name}'. "
                f"Accepted extensions: {', '.join(allowed)}"
            )

    @staticmethod
    def assert_output_dir_writable(output_path: Path) -> None:
        """Create the parent directory of *output_path* if it is absent.

        Raises:
            OutputWriteError: If the directory cannot be created.
        """
        parent = Path(output_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(str(output_path), str(exc)) from exc

    # ------------------------------------------------------------------
    # Tabular data checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_columns_exist(
        df: object,  # pandas DataFrame
        required_columns: Sequence[str],
    ) -> None:
        """Assert that all *required_columns* are present in *df*.

        Raises:
            ColumnNotFoundError: On the first missing column found.
        """
        available = list(df.columns)  # type: ignore[attr-defined]
        for col in required_columns:
            if col not in available:
                raise ColumnNotFoundError(col, available)
