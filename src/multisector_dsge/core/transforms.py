"""パラメータ変換（有界区間 ⇔ 実数直線）

最適化・事後サンプリングは制約のない実数直線上で探索するため、
各パラメータは以下の3種類の単調全単射のいずれかで変換される。

    UNTRANSFORMED: x = r
    SQUARE_ROOT:   有限区間 (a, b) ⇔ ℝ（代数的関数、ロジスティックではない）
        cx = 2(x - (a+b)/2) / (b - a)
        r  = cx / √(1 - cx²)
        x  = (a+b)/2 + (b-a)/2 · r / √(1 + r²)
    EXPONENTIAL:   下限付き区間 (a, ∞) ⇔ ℝ
        r = b + log(x - a)
        x = a + exp(r - b)

(a, b) は変換パラメータ（transform_parameterization）で、値域 valuebounds とは独立。
"""

from enum import Enum

import numpy as np

from multisector_dsge.core.exceptions import InvalidInputError, OutOfBoundsError
from multisector_dsge.parameters.constants import TRANSFORM_CONSTANTS

Interval = tuple[float, float]


class TransformKind(Enum):
    """変換の種類"""

    UNTRANSFORMED = "untransformed"
    SQUARE_ROOT = "square_root"
    EXPONENTIAL = "exponential"


def _check_in_bounds(value: float, bounds: Interval) -> None:
    lower, upper = bounds
    if not np.isfinite(value):
        raise OutOfBoundsError(f"値が有限ではありません: {value}")
    if value < lower or value > upper:
        raise OutOfBoundsError(f"値 {value} が範囲 [{lower}, {upper}] の外です")


def _check_finite(real: float) -> None:
    if not np.isfinite(real):
        raise InvalidInputError(f"実数直線上の値が有限ではありません: {real}")


def to_real(
    value: float,
    bounds: Interval,
    transform: TransformKind,
    transform_params: Interval,
) -> float:
    """モデル空間の値を実数直線へ変換する

    Args:
        value: モデル空間の値
        bounds: 値域（閉区間）
        transform: 変換の種類
        transform_params: 変換パラメータ (a, b)

    Returns:
        実数直線上の値

    Raises:
        OutOfBoundsError: 値が値域または変換の定義域の外にある場合
    """
    _check_in_bounds(value, bounds)
    x = float(value)
    a, b = transform_params
    nudge = TRANSFORM_CONSTANTS.boundary_nudge

    match transform:
        case TransformKind.UNTRANSFORMED:
            return x
        case TransformKind.SQUARE_ROOT:
            cx = 2.0 * (x - (a + b) / 2.0) / (b - a)
            if abs(cx) > 1.0 + nudge:
                raise OutOfBoundsError(
                    f"値 {x} がSquareRoot変換の区間 ({a}, {b}) の外です"
                )
            # 開区間の境界上では内側へずらして有限値を返す
            cx = float(np.clip(cx, -1.0 + nudge, 1.0 - nudge))
            return float(cx / np.sqrt(1.0 - cx**2))
        case TransformKind.EXPONENTIAL:
            gap = x - a
            if gap < 0.0:
                raise OutOfBoundsError(f"値 {x} がExponential変換の下限 {a} を下回っています")
            gap = max(gap, nudge * max(1.0, abs(a)))
            return b + float(np.log(gap))

    raise ValueError(f"未知の変換です: {transform}")


def to_bounded(
    real: float,
    bounds: Interval,
    transform: TransformKind,
    transform_params: Interval,
) -> float:
    """実数直線上の値をモデル空間へ戻す（to_realの逆変換）

    値域 bounds では切り詰めない。値域外の結果は更新時の値域検査で棄却される。

    Raises:
        InvalidInputError: 入力が非有限の場合
    """
    _check_finite(real)
    r = float(real)
    a, b = transform_params

    match transform:
        case TransformKind.UNTRANSFORMED:
            x = r
        case TransformKind.SQUARE_ROOT:
            x = (a + b) / 2.0 + (b - a) / 2.0 * r / np.sqrt(1.0 + r**2)
        case TransformKind.EXPONENTIAL:
            with np.errstate(over="ignore"):
                x = a + float(np.exp(r - b))
        case _:
            raise ValueError(f"未知の変換です: {transform}")

    return float(x)


def to_bounded_derivative(
    real: float,
    bounds: Interval,
    transform: TransformKind,
    transform_params: Interval,
) -> float:
    """逆変換の導関数 dx/dr

    事後分布を実数直線上で評価する際のヤコビアン補正に用いる。
    """
    _check_finite(real)
    r = float(real)
    a, b = transform_params

    match transform:
        case TransformKind.UNTRANSFORMED:
            return 1.0
        case TransformKind.SQUARE_ROOT:
            return (b - a) / 2.0 / (1.0 + r**2) ** 1.5
        case TransformKind.EXPONENTIAL:
            with np.errstate(over="ignore"):
                return float(np.exp(r - b))

    raise ValueError(f"未知の変換です: {transform}")
