"""
Par File Parser
================
Reads the fixed-width text of a par file into a :class:`Transformer`.

A par file is a header of ``H`` lines followed by one record per line::

    <meshcode:8> <latitude> <longitude> <altitude>

with columns fixed per :class:`~par_transformer.formats.Format`.  The
whole text must be valid; the first malformed record aborts the parse and
no partial map is returned.

Usage::

    from par_transformer.parser import Parser

    tf = Parser.from_format("TKY2JGD").parse(text)
"""

from __future__ import annotations

import logging
import re

from par_transformer.exceptions import ParseParError
from par_transformer.formats import ColumnRange, Format, FormatSpec
from par_transformer.point import Parameter
from par_transformer.transformer import Transformer

logger = logging.getLogger("par_transformer.parser")

_MESHCODE_RE = re.compile(r"\d{8}", re.ASCII)
_PARAMETER_RE = re.compile(r"[+-]?\d+\.\d+", re.ASCII)


def _parse_meshcode(line: str, column: ColumnRange, lineno: int) -> int:
    substring = line[column.start : column.stop]
    if len(substring) == column.width:
        substring = substring.strip()
        if _MESHCODE_RE.fullmatch(substring):
            return int(substring)
    raise ParseParError(
        f"parse error: meshcode l{lineno}:{column.start}:{column.stop}",
        lineno=lineno,
        field="meshcode",
        start=column.start,
        stop=column.stop,
    )


def _parse_value(
    line: str, column: ColumnRange | None, name: str, lineno: int
) -> float:
    if column is None:
        return 0.0

    substring = line[column.start : column.stop]
    if len(substring) == column.width:
        substring = substring.strip()
        if _PARAMETER_RE.fullmatch(substring):
            return float(substring)
    raise ParseParError(
        f"parse error: {name} l{lineno}:{column.start}:{column.stop}",
        lineno=lineno,
        field=name,
        start=column.start,
        stop=column.stop,
    )


def _split_lines(text: str) -> list[str]:
    # Only "\n" separates lines; a single trailing "\n" ends the text and a
    # trailing "\r" is dropped from each line.
    if text.endswith("\n"):
        text = text[:-1]
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


class Parser:
    """Fixed-width par parser bound to one format.

    Args:
        format: A :class:`Format` or its name.

    Raises:
        InvalidValueError: If *format* names no supported format.
    """

    def __init__(self, format: Format | str) -> None:
        self.format: Format = Format.parse(format)
        self.spec: FormatSpec = self.format.spec

    @classmethod
    def from_format(cls, format: Format | str) -> Parser:
        return cls(format)

    def parse(self, text: str, description: str | None = None) -> Transformer:
        """Parse *text* into a :class:`Transformer`.

        Args:
            text: Whole content of a par file.
            description: Overrides the description, which otherwise is the
                         header lines joined with (and ended by) ``"\\n"``.

        Returns:
            A Transformer bound to this parser's format.  Duplicated
            meshcodes keep the parameter of the last record.

        Raises:
            ParseParError: If the header is short or any record is malformed.
        """
        lines = _split_lines(text)
        spec = self.spec

        if len(lines) < spec.header:
            raise ParseParError(
                f"header too short: expected {spec.header} line(s), got {len(lines)}"
            )

        if description is None:
            description = "\n".join(lines[: spec.header]) + "\n"

        end_of_line = spec.end_of_line
        parameter: dict[int, Parameter] = {}

        for lineno, line in enumerate(lines[spec.header :], start=spec.header + 1):
            if end_of_line < len(line):
                raise ParseParError(
                    f"invalid line: l{lineno} is longer than {end_of_line} columns",
                    lineno=lineno,
                )

            meshcode = _parse_meshcode(line, spec.meshcode, lineno)
            latitude = _parse_value(line, spec.latitude, "latitude", lineno)
            longitude = _parse_value(line, spec.longitude, "longitude", lineno)
            altitude = _parse_value(line, spec.altitude, "altitude", lineno)

            parameter[meshcode] = Parameter(latitude, longitude, altitude)

        logger.debug(
            "Parsed %d parameter(s) from %d record line(s) as %s.",
            len(parameter),
            len(lines) - spec.header,
            self.format.value,
        )
        return Transformer(self.format, parameter, description)
