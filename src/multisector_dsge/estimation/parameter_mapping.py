"""推定パラメータとモデルのパラメータ集合の双方向マッピング

サンプラー・最適化で使用するフラットなθベクトル（モデル空間）および
実数直線上のベクトル x と、モデルの推定対象パラメータとの変換を担当する。
θの並びはパラメータ集合の宣言順（固定パラメータを除く）。
"""

from dataclasses import dataclass

import numpy as np

from multisector_dsge.core.exceptions import ValidationError
from multisector_dsge.core.model import CarvalhoModel
from multisector_dsge.core.transforms import (
    Interval,
    TransformKind,
    to_bounded,
    to_bounded_derivative,
    to_real,
)
from multisector_dsge.parameters.parameter_set import ParameterSet


@dataclass(frozen=True)
class ParameterSpec:
    """推定パラメータの仕様

    Attributes:
        name: パラメータ名（一意識別子）
        default: 構築時の値
        lower_bound: 下限
        upper_bound: 上限
        transform: 実数直線への変換
        transform_parameterization: 変換パラメータ (a, b)
    """

    name: str
    default: float
    lower_bound: float
    upper_bound: float
    transform: TransformKind
    transform_parameterization: Interval

    @property
    def bounds(self) -> Interval:
        return (self.lower_bound, self.upper_bound)


class ParameterMapping:
    """θベクトル・実数直線ベクトルとパラメータ集合の双方向マッピング

    構築時点の推定対象パラメータの仕様を保持する。以後パラメータ集合が
    更新されても仕様（値域・変換・デフォルト値）は変わらない。
    """

    def __init__(self, params: ParameterSet) -> None:
        self.specs: list[ParameterSpec] = [
            ParameterSpec(
                name=p.key,
                default=p.value,
                lower_bound=p.valuebounds[0],
                upper_bound=p.valuebounds[1],
                transform=p.transform,
                transform_parameterization=p.transform_parameterization,
            )
            for p in params.free_parameters
        ]
        self._name_to_index: dict[str, int] = {spec.name: i for i, spec in enumerate(self.specs)}

    @classmethod
    def from_model(cls, model: CarvalhoModel) -> "ParameterMapping":
        return cls(model.parameters)

    @property
    def names(self) -> list[str]:
        """推定パラメータ名のリスト"""
        return [spec.name for spec in self.specs]

    @property
    def n_params(self) -> int:
        """推定パラメータ数"""
        return len(self.specs)

    def index_of(self, name: str) -> int:
        """パラメータ名のθ内の位置"""
        try:
            return self._name_to_index[name]
        except KeyError:
            raise ValidationError(f"推定対象パラメータではありません: {name}") from None

    def defaults(self) -> np.ndarray:
        """デフォルト値のベクトルを返す"""
        return np.array([spec.default for spec in self.specs], dtype=np.float64)

    def bounds(self) -> list[tuple[float, float]]:
        """各パラメータの(下限, 上限)タプルのリストを返す"""
        return [spec.bounds for spec in self.specs]

    def _check_length(self, vec: np.ndarray, label: str) -> None:
        if vec.shape != (self.n_params,):
            msg = f"{label}の長さが不正: {vec.shape} != ({self.n_params},)"
            raise ValidationError(msg)

    def to_real(self, theta: np.ndarray) -> np.ndarray:
        """モデル空間のθを実数直線上のベクトルに変換する

        Raises:
            ValidationError: 長さが不正な場合
            OutOfBoundsError: 値域外の要素がある場合
        """
        theta = np.asarray(theta, dtype=np.float64)
        self._check_length(theta, "θ")
        return np.array(
            [
                to_real(v, spec.bounds, spec.transform, spec.transform_parameterization)
                for spec, v in zip(self.specs, theta, strict=True)
            ],
            dtype=np.float64,
        )

    def to_model(self, x: np.ndarray) -> np.ndarray:
        """実数直線上のベクトルをモデル空間のθに変換する"""
        x = np.asarray(x, dtype=np.float64)
        self._check_length(x, "x")
        return np.array(
            [
                to_bounded(r, spec.bounds, spec.transform, spec.transform_parameterization)
                for spec, r in zip(self.specs, x, strict=True)
            ],
            dtype=np.float64,
        )

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        """逆変換 x → θ のヤコビアン（対角行列）

        Returns:
            (n_params, n_params) の対角行列
        """
        x = np.asarray(x, dtype=np.float64)
        self._check_length(x, "x")
        diag = [
            to_bounded_derivative(r, spec.bounds, spec.transform, spec.transform_parameterization)
            for spec, r in zip(self.specs, x, strict=True)
        ]
        return np.diag(np.array(diag, dtype=np.float64))

    def log_abs_det_jacobian(self, x: np.ndarray) -> float:
        """log|det J|（実数直線上で事後分布を評価する際の補正項）"""
        diag = np.diag(self.jacobian(x))
        with np.errstate(divide="ignore"):
            return float(np.sum(np.log(np.abs(diag))))

    def params_to_theta(self, params: ParameterSet) -> np.ndarray:
        """パラメータ集合の現在値からθベクトルを構築する"""
        return np.array([params.get(name).value for name in self.names], dtype=np.float64)

    def apply(self, model: CarvalhoModel, theta: np.ndarray) -> None:
        """θをモデルに適用し、定常状態を再計算する

        Raises:
            ValidationError: 長さ・値域の不正
            InvalidParameterDrawError: 定常状態が定義できない場合（モデルは変更されない）
        """
        theta = np.asarray(theta, dtype=np.float64)
        self._check_length(theta, "θ")
        if model.parameters.free_names != self.names:
            raise ValidationError("モデルの推定対象パラメータがマッピングと一致しません")
        model.update(theta)
