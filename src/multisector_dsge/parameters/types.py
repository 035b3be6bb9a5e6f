"""パラメータ型

推定対象パラメータは UnscaledParameter / ScaledParameter、定常状態値は
SteadyStateParameter で表すタグ付き直和型。型階層は持たず、共通プロトコル
ParameterLike（key, value）を通じて扱う。

- value: モデル空間の値（常に valuebounds の閉区間内）
- scaled_value: 方程式で使う値。スケーリング関数があれば毎回 scaling(value) を計算する
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from multisector_dsge.core.exceptions import FixedParameterError, OutOfBoundsError
from multisector_dsge.core.transforms import (
    Interval,
    TransformKind,
    to_bounded,
    to_real,
)
from multisector_dsge.estimation.priors import ParameterPrior

Scaling = Callable[[float], float]


class ParameterLike(Protocol):
    """全パラメータ型に共通の読み取りインターフェース"""

    @property
    def key(self) -> str: ...

    @property
    def value(self) -> float: ...


# --- 推定対象パラメータ共通の処理（各データクラスが本体に束縛する） ---


def _validate(param: "EstimableParameter") -> None:
    if param.fixed != (param.prior is None):
        raise ValueError(f"{param.key}: 事前分布は固定パラメータでのみ省略できます")
    lower, upper = param.valuebounds
    if lower > upper:
        raise ValueError(f"{param.key}: 下限({lower}) > 上限({upper})")
    _check_bounds(param, param._value)


def _get_value(param: "EstimableParameter") -> float:
    return param._value


def _check_bounds(param: "EstimableParameter", value: float) -> None:
    lower, upper = param.valuebounds
    if not (math.isfinite(value) and lower <= value <= upper):
        raise OutOfBoundsError(
            f"パラメータ {param.key}={value} が範囲 [{lower}, {upper}] の外です"
        )


def _check_value(param: "EstimableParameter", value: float) -> None:
    """set_valueが受け付ける値かどうかを検査する（状態は変更しない）

    Raises:
        FixedParameterError: 固定パラメータの場合
        OutOfBoundsError: 値域の外の場合
    """
    if param.fixed:
        raise FixedParameterError(
            f"固定パラメータ {param.key} はオーバーライド経路でのみ変更できます"
        )
    _check_bounds(param, float(value))


def _set_value(param: "EstimableParameter", value: float) -> None:
    """値を更新する

    失敗した場合は値を変更しない。

    Raises:
        FixedParameterError: 固定パラメータの場合
        OutOfBoundsError: 値域の外の場合
    """
    _check_value(param, value)
    param._value = float(value)


def _override(param: "EstimableParameter", value: float) -> None:
    """サブスペック構築時のオーバーライド経路

    固定パラメータは値域ごと新しい値に置き換える。
    推定対象パラメータは通常どおり値域を検査する。
    """
    value = float(value)
    if param.fixed:
        if not math.isfinite(value):
            raise OutOfBoundsError(f"パラメータ {param.key}={value} が有限ではありません")
        param.valuebounds = (value, value)
        param.transform_parameterization = (value, value)
        param._value = value
        return
    _check_bounds(param, value)
    param._value = value


def _to_real_line(param: "EstimableParameter") -> float:
    """現在値を実数直線上の値に変換する"""
    return to_real(
        param._value, param.valuebounds, param.transform, param.transform_parameterization
    )


def _from_real_line(param: "EstimableParameter", x: float) -> float:
    """実数直線上の値に対応するモデル空間の値（値は変更しない）

    値域の外になりうるので、更新前に check_value で検査すること。
    """
    return to_bounded(x, param.valuebounds, param.transform, param.transform_parameterization)


def _log_prior(param: "EstimableParameter") -> float:
    """現在値での事前分布の対数密度（固定パラメータは0）"""
    if param.prior is None:
        return 0.0
    return param.prior.log_pdf(param._value)


def _repr(param: "EstimableParameter") -> str:
    return f"{type(param).__name__}({param.key}={param._value!r}, fixed={param.fixed})"


@dataclass(eq=False, repr=False)
class UnscaledParameter:
    """スケーリングを持たない推定対象パラメータ

    Attributes:
        key: 一意なシンボル名
        valuebounds: 値域（閉区間）
        transform_parameterization: 変換パラメータ (a, b)
        transform: 変換の種類
        prior: 事前分布（固定パラメータではNone）
        fixed: 推定対象外かどうか
        description: 説明
        tex_label: LaTeXラベル
    """

    key: str
    _value: float
    valuebounds: Interval
    transform_parameterization: Interval
    transform: TransformKind
    prior: ParameterPrior | None
    fixed: bool
    description: str = ""
    tex_label: str = ""

    __post_init__ = _validate
    value = property(_get_value)
    check_value = _check_value
    set_value = _set_value
    override = _override
    to_real_line = _to_real_line
    from_real_line = _from_real_line
    log_prior = _log_prior
    __repr__ = _repr

    @property
    def scaled_value(self) -> float:
        return self._value


@dataclass(eq=False, repr=False)
class ScaledParameter:
    """スケーリング関数を持つ推定対象パラメータ

    例: β は年率の割引率 x で推定し、方程式では 1/(1 + x/100) を使う。
    """

    key: str
    _value: float
    valuebounds: Interval
    transform_parameterization: Interval
    transform: TransformKind
    prior: ParameterPrior | None
    fixed: bool
    scaling: Scaling
    description: str = ""
    tex_label: str = ""

    __post_init__ = _validate
    value = property(_get_value)
    check_value = _check_value
    set_value = _set_value
    override = _override
    to_real_line = _to_real_line
    from_real_line = _from_real_line
    log_prior = _log_prior
    __repr__ = _repr

    @property
    def scaled_value(self) -> float:
        return float(self.scaling(self._value))


@dataclass(eq=False)
class SteadyStateParameter:
    """定常状態値

    初回の定常状態計算まではNaN。ソルバー以外からは読み取り専用。
    """

    key: str
    _value: float = math.nan
    description: str = ""
    tex_label: str = ""

    @property
    def value(self) -> float:
        return self._value

    def _assign(self, value: float) -> None:
        self._value = float(value)


EstimableParameter = UnscaledParameter | ScaledParameter
AnyParameter = UnscaledParameter | ScaledParameter | SteadyStateParameter


def parameter(
    key: str,
    value: float,
    valuebounds: Interval | None = None,
    transform_parameterization: Interval | None = None,
    transform: TransformKind = TransformKind.UNTRANSFORMED,
    prior: ParameterPrior | None = None,
    *,
    fixed: bool = True,
    scaling: Scaling | None = None,
    description: str = "",
    tex_label: str = "",
) -> EstimableParameter:
    """推定対象パラメータを生成する

    固定パラメータは値域・変換パラメータを (value, value) に縮退させ、
    無変換・事前分布なしとして扱う。

    Args:
        key: 一意なシンボル名
        value: 初期値（モデル空間）
        valuebounds: 値域。固定パラメータでは無視される
        transform_parameterization: 変換パラメータ。固定パラメータでは無視される
        transform: 変換の種類
        prior: 事前分布。推定対象パラメータでは必須
        fixed: 推定対象外かどうか
        scaling: モデル空間 → 方程式空間の変換関数
        description: 説明
        tex_label: LaTeXラベル

    Returns:
        UnscaledParameter または ScaledParameter
    """
    value = float(value)
    if fixed:
        valuebounds = (value, value)
        transform_parameterization = (value, value)
        transform = TransformKind.UNTRANSFORMED
        prior = None
    elif valuebounds is None or transform_parameterization is None or prior is None:
        raise ValueError(f"{key}: 推定対象パラメータには値域・変換パラメータ・事前分布が必要です")

    bounds = (float(valuebounds[0]), float(valuebounds[1]))
    tparams = (float(transform_parameterization[0]), float(transform_parameterization[1]))
    if scaling is None:
        return UnscaledParameter(
            key, value, bounds, tparams, transform, prior, fixed, description, tex_label
        )
    return ScaledParameter(
        key, value, bounds, tparams, transform, prior, fixed, scaling, description, tex_label
    )
