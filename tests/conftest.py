"""
Shared fixtures: small par files around Tsukuba (meshcode 54401027).
"""

from __future__ import annotations

from pathlib import Path

import pytest

from par_transformer.formats import Format
from par_transformer.point import Parameter
from par_transformer.transformer import Transformer


def tky2jgd_line(meshcode: int, latitude: float, longitude: float) -> str:
    return f"{meshcode:8d} {latitude:9.5f} {longitude:9.5f}"


def semidyna_line(meshcode: int, latitude: float, longitude: float, altitude: float) -> str:
    return f"{meshcode:8d} {latitude:9.5f} {longitude:9.5f} {altitude:9.5f}"


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


TKY2JGD_PARAMETERS = {
    54401027: Parameter(11.49105, -11.80078, 0.0),
    54401037: Parameter(11.48732, -11.80198, 0.0),
    54401028: Parameter(11.49096, -11.80476, 0.0),
    54401038: Parameter(11.48769, -11.80555, 0.0),
    54401047: Parameter(11.48373, -11.80318, 0.0),
    54401048: Parameter(11.48438, -11.80689, 0.0),
}

PATCHJGD_PARAMETERS = {
    57413454: Parameter(-0.05984, 0.22393, -1.25445),
    57413464: Parameter(-0.06011, 0.22417, -1.24845),
    57413455: Parameter(-0.0604, 0.2252, -1.29),
    57413465: Parameter(-0.06064, 0.22523, -1.27667),
    57413474: Parameter(-0.06037, 0.22424, -0.35308),
    57413475: Parameter(-0.06089, 0.22524, 0.0),
}

SEMIDYNA_PARAMETERS = {
    54401005: Parameter(-0.00622, 0.01516, 0.0946),
    54401055: Parameter(-0.0062, 0.01529, 0.08972),
    54401100: Parameter(-0.00663, 0.01492, 0.10374),
    54401150: Parameter(-0.00664, 0.01506, 0.10087),
}


# ---------------------------------------------------------------------------
# Par file texts
# ---------------------------------------------------------------------------


@pytest.fixture()
def tky2jgd_text() -> str:
    """A TKY2JGD par file: two header lines, then records."""
    lines = ["JGD2000-TokyoDatum Ver.2.1.2", "MeshCode   dB(sec)   dL(sec)"]
    lines += [
        tky2jgd_line(code, p.latitude, p.longitude)
        for code, p in TKY2JGD_PARAMETERS.items()
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture()
def semidyna_text() -> str:
    """A SemiDynaEXE par file: sixteen header lines, then records."""
    lines = [f"header line {i}" for i in range(16)]
    lines += [
        semidyna_line(code, p.latitude, p.longitude, p.altitude)
        for code, p in SEMIDYNA_PARAMETERS.items()
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture()
def semidyna_par(tmp_path: Path, semidyna_text: str) -> Path:
    """Write the SemiDynaEXE par file and return its path."""
    par_path = tmp_path / "SemiDyna.par"
    par_path.write_text(semidyna_text, encoding="utf-8")
    return par_path


# ---------------------------------------------------------------------------
# Transformers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tky2jgd() -> Transformer:
    return Transformer(Format.TKY2JGD, dict(TKY2JGD_PARAMETERS))


@pytest.fixture()
def patchjgd_hv() -> Transformer:
    return Transformer(Format.PatchJGD_HV, dict(PATCHJGD_PARAMETERS))


@pytest.fixture()
def semidyna() -> Transformer:
    return Transformer(Format.SemiDynaEXE, dict(SEMIDYNA_PARAMETERS))
