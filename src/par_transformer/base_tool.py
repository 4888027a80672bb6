"""
par-transformer — Base Tool
============================
Abstract base class for the file-based tools built on the transformer.

Design Pattern:
    Template Method — :meth:`GeoTool.run` fixes the pipeline
    (validate → process → report) and subclasses fill in
    :meth:`validate_inputs` and :meth:`process`.

The core library never touches logging handlers; tools call
:func:`configure_logging` once, the CLI through the tool constructor.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

# Root of the package logger hierarchy; modules log through children
# such as ``par_transformer.parser``.
logger = logging.getLogger("par_transformer")

ResultT = TypeVar("ResultT")


def configure_logging(verbose: bool = False) -> None:
    """Attach a console handler to the ``par_transformer`` logger.

    The handler is added only once; later calls just update the level
    (DEBUG when *verbose*, INFO otherwise).
    """
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                fmt="[%(asctime)s] %(levelname)-8s %(name)s — %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


class GeoTool(ABC, Generic[ResultT]):
    """Abstract base class for tools that read an input file and write one.

    Attributes:
        input_path: Path to the primary input file.
        output_path: Path where the output is written.
        verbose: Log DEBUG messages as well when ``True``.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        *,
        verbose: bool = False,
    ) -> None:
        self.input_path: Path = Path(input_path)
        self.output_path: Path = Path(output_path)
        self.verbose: bool = verbose

        configure_logging(verbose)

    @abstractmethod
    def validate_inputs(self) -> None:
        """Check every precondition before processing begins.

        Raises:
            InputValidationError: If an input file or column is missing.
        """

    @abstractmethod
    def process(self) -> ResultT:
        """Do the work and return the tool's result object."""

    def run(self) -> ResultT:
        """Run :meth:`validate_inputs`, then :meth:`process`, and report.

        Exceptions from either step propagate unchanged.
        """
        logger.info("Starting %s", self.__class__.__name__)
        start = time.perf_counter()

        self.validate_inputs()
        result = self.process()

        logger.info(
            "%s completed in %.2fs → %s",
            self.__class__.__name__,
            time.perf_counter() - start,
            self.output_path,
        )
        return result

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"input_path={self.input_path!r}, "
            f"output_path={self.output_path!r})"
        )
