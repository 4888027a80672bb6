"""
par-transformer
================
Coordinate transformation between datums by gridded correction parameters
(par files): TKY2JGD, PatchJGD, SemiDynaEXE, geonetF3, ITRF2014 and friends.

Public API::

    from par_transformer import Point, Transformer

    tf = Transformer.from_string(text, format="TKY2JGD")
    tf.forward(Point(36.10377479, 140.087855041))
"""

from par_transformer.exceptions import (
    CorrectionNotFoundError,
    InvalidValueError,
    MeshCellError,
    MeshError,
    MeshOverflowError,
    MeshUnitError,
    ParameterNotFoundError,
    ParseParError,
    ParTransformerError,
    PointError,
)
from par_transformer.formats import FORMAT_SPECS, Format, FormatSpec, is_format, mesh_unit
from par_transformer.mesh import MeshCell, MeshCoord, MeshNode, MeshUnit, is_meshcode
from par_transformer.parser import Parser
from par_transformer.point import Correction, Parameter, Point
from par_transformer.transformer import Transformer

__all__ = [
    "Transformer",
    "Parser",
    "Format",
    "FormatSpec",
    "FORMAT_SPECS",
    "is_format",
    "mesh_unit",
    "Point",
    "Correction",
    "Parameter",
    "MeshCoord",
    "MeshNode",
    "MeshCell",
    "MeshUnit",
    "is_meshcode",
    "ParTransformerError",
    "InvalidValueError",
    "MeshError",
    "MeshUnitError",
    "MeshOverflowError",
    "MeshCellError",
    "ParseParError",
    "PointError",
    "ParameterNotFoundError",
    "CorrectionNotFoundError",
]
__version__ = "1.0.0"
