"""
Batch Par Transformer
======================
Transforms every point of a CSV file with a par file and writes the result
as CSV or as a GeoJSON FeatureCollection.

Classes:
    BatchTransformConfig   Settings: par file, format, direction, columns.
    BatchTransformResult   Immutable summary of one run.
    BatchParTransformer    The tool (inherits GeoTool).

Typical usage::

    from pathlib import Path
    from par_transformer.batch import BatchParTransformer, BatchTransformConfig

    config = BatchTransformConfig(
        par_path=Path("SemiDyna2024.par"),
        format="SemiDynaEXE",
        direction="backward",
    )
    BatchParTransformer(Path("points.csv"), Path("out.csv"), config).run()
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import pandas as pd

from par_transformer.base_tool import GeoTool
from par_transformer.exceptions import (
    CorrectionNotFoundError,
    InputValidationError,
    OutputWriteError,
    ParameterNotFoundError,
    PointError,
)
from par_transformer.formats import Format
from par_transformer.point import Point
from par_transformer.transformer import Transformer
from par_transformer.validators import Validators

logger = logging.getLogger("par_transformer.batch")

Direction = Literal["forward", "backward", "backward-compat"]

DIRECTIONS: tuple[str, ...] = ("forward", "backward", "backward-compat")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BatchTransformResult:
    """Summary of a completed batch run.

    Attributes:
        rows_processed: Rows transformed and written.
        rows_skipped: Rows dropped for null or non-numeric coordinates.
        rows_failed: Rows outside the grid or without convergence.
        format: Par-file format used.
        direction: Direction of the transform.
        output_path: Path where the output was written.
    """

    rows_processed: int
    rows_skipped: int
    rows_failed: int
    format: Format
    direction: str
    output_path: Path

    def summary(self) -> str:
        """Return a one-line summary for logging or display."""
        return (
            f"Transformed {self.rows_processed} rows "
            f"({self.rows_skipped} skipped, {self.rows_failed} failed) | "
            f"{self.format.value} {self.direction} | "
            f"Output: {self.output_path}"
        )


@dataclass
class BatchTransformConfig:
    """Configuration bundle for :class:`BatchParTransformer`.

    Attributes:
        par_path: Path to the par file.
        format: Format of the par file, a :class:`Format` or its name.
        direction: ``"forward"``, ``"backward"`` (exact) or
                   ``"backward-compat"`` (GIAJ web-service compatible).
        lat_col: Column holding latitudes [deg].
        lon_col: Column holding longitudes [deg].
        alt_col: Column holding altitudes [m]; ``None`` means 0.0 and no
                 altitude column in the output.
        output_format: ``"csv"`` or ``"geojson"``.
        encoding: Text encoding of the par file.
        description: Overrides the description read from the header.
    """

    par_path: Path
    format: Format | str
    direction: Direction = "forward"
    lat_col: str = "latitude"
    lon_col: str = "longitude"
    alt_col: str | None = None
    output_format: Literal["csv", "geojson"] = "csv"
    encoding: str = "utf-8"
    description: str | None = None


# ---------------------------------------------------------------------------
# Main tool class
# ---------------------------------------------------------------------------


class BatchParTransformer(GeoTool[BatchTransformResult]):
    """Transform the coordinate columns of a CSV file with a par file.

    Args:
        input_path: CSV file of points.
        output_path: Where the transformed points are written.
        config: A :class:`BatchTransformConfig`.
        verbose: Enable DEBUG-level logging.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        config: BatchTransformConfig,
        *,
        verbose: bool = False,
    ) -> None:
        super().__init__(input_path, output_path, verbose=verbose)
        self.config: BatchTransformConfig = config
        self._result: BatchTransformResult | None = None

    # ------------------------------------------------------------------
    # GeoTool abstract method implementations
    # ------------------------------------------------------------------

    def validate_inputs(self) -> None:
        """Validate files, format, direction and columns.

        Raises:
            InputValidationError: On a missing or empty file, a bad
                extension or an unknown direction.
            InvalidValueError: If the format names no supported format.
            ColumnNotFoundError: If a coordinate column is missing.
            OutputWriteError: If the output directory cannot be created.
        """
        Validators.assert_file_exists(self.input_path)
        Validators.assert_supported_extension(self.input_path, [".csv"])
        Validators.assert_file_exists(self.config.par_path)
        Format.parse(self.config.format)
        if self.config.direction not in DIRECTIONS:
            raise InputValidationError(
                f"Unknown direction '{self.config.direction}'. "
                f"Choose one of: {', '.join(DIRECTIONS)}"
            )
        Validators.assert_output_dir_writable(self.output_path)

        try:
            header = pd.read_csv(self.input_path, nrows=0)
        except pd.errors.EmptyDataError as exc:
            raise InputValidationError(
                f"Input file is empty: '{self.input_path}'."
            ) from exc
        Validators.assert_columns_exist(header, self._coordinate_columns())

        logger.debug("Inputs validated successfully.")

    def process(self) -> BatchTransformResult:
        """Load the par file, transform every row and write the output.

        Raises:
            ParseParError: If the par file is malformed.
            OutputWriteError: If writing the output fails.
        """
        text = self.config.par_path.read_text(encoding=self.config.encoding)
        transformer = Transformer.from_string(
            text, self.config.format, self.config.description
        )
        logger.info("Loaded %r", transformer)

        df = pd.read_csv(self.input_path)
        original_len = len(df)

        df = self._drop_invalid_rows(df)
        rows_skipped = original_len - len(df)
        if rows_skipped:
            logger.warning(
                "Dropped %d row(s) with null or non-numeric coordinate values.",
                rows_skipped,
            )

        df, rows_failed = self._transform_rows(transformer, df)
        if rows_failed:
            logger.warning(
                "Dropped %d row(s) that could not be transformed.", rows_failed
            )

        try:
            if self.config.output_format == "geojson":
                self._write_geojson(df)
            else:
                df.to_csv(self.output_path, index=False)
        except OSError as exc:
            raise OutputWriteError(str(self.output_path), str(exc)) from exc

        self._result = BatchTransformResult(
            rows_processed=len(df),
            rows_skipped=rows_skipped,
            rows_failed=rows_failed,
            format=transformer.format,
            direction=self.config.direction,
            output_path=self.output_path,
        )
        logger.info(self._result.summary())
        return self._result

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _coordinate_columns(self) -> list[str]:
        columns = [self.config.lat_col, self.config.lon_col]
        if self.config.alt_col is not None:
            columns.append(self.config.alt_col)
        return columns

    def _drop_invalid_rows(self, df: pd.DataFrame) -> pd.DataFrame:
        mask = pd.Series(True, index=df.index)
        for col in self._coordinate_columns():
            df[col] = pd.to_numeric(df[col], errors="coerce")
            mask &= df[col].notna()
        return df[mask].copy()

    def _transform_rows(
        self, transformer: Transformer, df: pd.DataFrame
    ) -> tuple[pd.DataFrame, int]:
        """Transform each row; rows the grid does not cover are dropped."""
        func = {
            "forward": transformer.forward,
            "backward": transformer.backward,
            "backward-compat": transformer.backward_compat,
        }[self.config.direction]

        lat_col, lon_col, alt_col = (
            self.config.lat_col,
            self.config.lon_col,
            self.config.alt_col,
        )

        keep: list[bool] = []
        latitudes: list[float] = []
        longitudes: list[float] = []
        altitudes: list[float] = []

        for index, row in df.iterrows():
            altitude = float(row[alt_col]) if alt_col is not None else 0.0
            point = Point(float(row[lat_col]), float(row[lon_col]), altitude)
            try:
                result = func(point)
            except (PointError, ParameterNotFoundError, CorrectionNotFoundError) as exc:
                logger.debug("Row %s not transformed: %s", index, exc.message)
                keep.append(False)
                continue

            keep.append(True)
            latitudes.append(result.latitude)
            longitudes.append(result.longitude)
            altitudes.append(result.altitude)

        out = df.loc[keep].copy()
        out[lat_col] = latitudes
        out[lon_col] = longitudes
        if alt_col is not None:
            out[alt_col] = altitudes

        return out, len(df) - len(out)

    def _write_geojson(self, df: pd.DataFrame) -> None:
        """Serialise the points as a GeoJSON FeatureCollection.

        Coordinates are ``[longitude, latitude]`` or, with an altitude
        column, ``[longitude, latitude, altitude]``.  All other columns go
        to ``properties``.
        """
        coord_cols = self._coordinate_columns()
        prop_cols = [c for c in df.columns if c not in coord_cols]

        features = []
        for _, row in df.iterrows():
            coordinates = [row[self.config.lon_col], row[self.config.lat_col]]
            if self.config.alt_col is not None:
                coordinates.append(row[self.config.alt_col])
            features.append(
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": coordinates},
                    "properties": {c: row[c] for c in prop_cols},
                }
            )

        geojson = {"type": "FeatureCollection", "features": features}

        with open(self.output_path, "w", encoding="utf-8") as fh:
            json.dump(geojson, fh, indent=2, default=str)

    @property
    def result(self) -> BatchTransformResult | None:
        """The result of the last :meth:`run`, or ``None`` before it."""
        return self._result
