"""モデル定数の定義

マジックナンバーを排除し、意味のある名前を付ける
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConstants:
    """定常状態ソルバーの定数"""

    # σ_ω の根探索
    sigma_omega_initial_guess: float = 0.5
    sigma_omega_fallback: float = 0.5  # 根探索失敗時の既定値（初期値と同一）
    root_tolerance: float = 1.48e-8
    root_max_iterations: int = 100

    # 労働の定常状態（正規化）
    steady_state_labor: float = 1.0


@dataclass(frozen=True)
class TransformConstants:
    """パラメータ変換の定数"""

    # 変換区間の境界上の値を内側にずらす幅（相対）
    boundary_nudge: float = 1e-12


@dataclass(frozen=True)
class ModelDimensions:
    """モデル構造の既定値"""

    default_n_sectors: int = 1
    default_subspec: str = "ss2"
    # この番号未満の先行政策ショック標準偏差を推定対象とする
    anticipated_shock_estimated_below: int = 13


SOLVER_CONSTANTS = SolverConstants()
TRANSFORM_CONSTANTS = TransformConstants()
MODEL_DIMENSIONS = ModelDimensions()
