"""Multisector DSGE - BGG金融摩擦付き多部門粘着価格DSGEモデル"""

from importlib.metadata import PackageNotFoundError, version


def _resolve_version() -> str:
    """配布メタデータからバージョンを解決する。"""
    try:
        return version("msdsge")
    except PackageNotFoundError:
        # インストール前のローカル実行時フォールバック
        return "0+unknown"


__version__ = _resolve_version()

from multisector_dsge.core.indices import IndexCategory, ModelIndices, build_indices
from multisector_dsge.core.model import CarvalhoModel
from multisector_dsge.core.steady_state import SteadyState, SteadyStateSolver, steadystate
from multisector_dsge.estimation.parameter_mapping import ParameterMapping
from multisector_dsge.parameters.parameter_set import ParameterSet

__all__ = [
    "CarvalhoModel",
    "IndexCategory",
    "ModelIndices",
    "ParameterMapping",
    "ParameterSet",
    "SteadyState",
    "SteadyStateSolver",
    "build_indices",
    "steadystate",
]
