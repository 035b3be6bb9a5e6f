"""パラメータ集合

推定対象パラメータと定常状態値を宣言順に保持し、キー → 位置の辞書（keys）で
O(1)に参照する。キーは両方の種類を合わせて一意。

一括更新（update）は全要素を検査してから適用するため、途中で失敗しても
部分的な更新は観測されない。
"""

from copy import deepcopy
from collections.abc import Iterator, Mapping, Sequence

import numpy as np

from multisector_dsge.core.exceptions import (
    DuplicateKeyError,
    FixedParameterError,
    UnknownKeyError,
    ValidationError,
)
from multisector_dsge.parameters.types import (
    AnyParameter,
    EstimableParameter,
    SteadyStateParameter,
)


class ParameterSet:
    """パラメータと定常状態値の順序付き集合"""

    def __init__(self) -> None:
        self._entries: list[AnyParameter] = []
        self.keys: dict[str, int] = {}

    # --- 構築 ---

    def add_parameter(self, param: AnyParameter) -> AnyParameter:
        """パラメータまたは定常状態値を追加する

        Raises:
            DuplicateKeyError: キーが既に存在する場合
        """
        if param.key in self.keys:
            raise DuplicateKeyError(f"パラメータキーが重複しています: {param.key}")
        self.keys[param.key] = len(self._entries)
        self._entries.append(param)
        return param

    # --- 参照 ---

    def get(self, key: str) -> AnyParameter:
        """キーに対応するパラメータ実体を返す"""
        try:
            return self._entries[self.keys[key]]
        except KeyError:
            raise UnknownKeyError(f"未知のパラメータキーです: {key}") from None

    def __getitem__(self, key: str) -> float:
        """推定対象パラメータはスケール後の値、定常状態値はその値を返す"""
        param = self.get(key)
        if isinstance(param, SteadyStateParameter):
            return param.value
        return param.scaled_value

    def __contains__(self, key: object) -> bool:
        return key in self.keys

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AnyParameter]:
        return iter(self._entries)

    @property
    def parameters(self) -> list[EstimableParameter]:
        """推定対象パラメータ（固定を含む）を宣言順に返す"""
        return [p for p in self._entries if not isinstance(p, SteadyStateParameter)]

    @property
    def steady_state(self) -> list[SteadyStateParameter]:
        """定常状態値を宣言順に返す"""
        return [p for p in self._entries if isinstance(p, SteadyStateParameter)]

    @property
    def free_parameters(self) -> list[EstimableParameter]:
        """固定されていないパラメータを宣言順に返す"""
        return [p for p in self.parameters if not p.fixed]

    @property
    def free_names(self) -> list[str]:
        return [p.key for p in self.free_parameters]

    def values(self) -> np.ndarray:
        """全推定対象パラメータのモデル空間の値"""
        return np.array([p.value for p in self.parameters], dtype=np.float64)

    def free_values(self) -> np.ndarray:
        """固定されていないパラメータのモデル空間の値"""
        return np.array([p.value for p in self.free_parameters], dtype=np.float64)

    def steady_state_values(self) -> dict[str, float]:
        return {p.key: p.value for p in self.steady_state}

    def copy(self) -> "ParameterSet":
        """他のインスタンスと状態を共有しない複製を返す"""
        return deepcopy(self)

    # --- 更新 ---

    def update(self, values: Sequence[float] | np.ndarray) -> None:
        """固定されていないパラメータを宣言順のベクトルで一括更新する

        全要素を検査した後に適用するため、失敗時は何も変更されない。

        Raises:
            ValidationError: ベクトル長が不正な場合
            OutOfBoundsError: いずれかの要素が値域外の場合
        """
        free = self.free_parameters
        vec = np.asarray(values, dtype=np.float64)
        if vec.shape != (len(free),):
            raise ValidationError(f"ベクトルの長さが不正: {vec.shape} != ({len(free)},)")

        for param, v in zip(free, vec, strict=True):
            param.check_value(float(v))
        for param, v in zip(free, vec, strict=True):
            param.set_value(float(v))

    def override(self, key: str, value: float) -> None:
        """サブスペック構築用のオーバーライド経路"""
        param = self.get(key)
        if isinstance(param, SteadyStateParameter):
            raise FixedParameterError(f"定常状態値 {key} はソルバー以外から変更できません")
        param.override(value)

    def replace_parameter(self, param: EstimableParameter) -> None:
        """同じキーのパラメータを宣言位置を保ったまま置き換える（サブスペック構築用）"""
        current = self.get(param.key)
        if isinstance(current, SteadyStateParameter):
            raise FixedParameterError(f"定常状態値 {param.key} は置き換えられません")
        self._entries[self.keys[param.key]] = param

    def assign_steady_state(self, values: Mapping[str, float]) -> None:
        """定常状態値を書き込む（ソルバー専用）"""
        targets: list[tuple[SteadyStateParameter, float]] = []
        for key, value in values.items():
            param = self.get(key)
            if not isinstance(param, SteadyStateParameter):
                raise ValidationError(f"{key} は定常状態値ではありません")
            targets.append((param, value))
        for param, value in targets:
            param._assign(value)

    # --- 実数直線との変換 ---

    def to_real_vector(self) -> np.ndarray:
        """固定されていないパラメータを実数直線上のベクトルに変換する"""
        return np.array([p.to_real_line() for p in self.free_parameters], dtype=np.float64)

    def from_real_vector(self, x: Sequence[float] | np.ndarray) -> np.ndarray:
        """実数直線上のベクトルをモデル空間のベクトルに変換する（値は変更しない）"""
        free = self.free_parameters
        vec = np.asarray(x, dtype=np.float64)
        if vec.shape != (len(free),):
            raise ValidationError(f"ベクトルの長さが不正: {vec.shape} != ({len(free)},)")
        return np.array(
            [p.from_real_line(float(r)) for p, r in zip(free, vec, strict=True)],
            dtype=np.float64,
        )

    def update_from_real(self, x: Sequence[float] | np.ndarray) -> None:
        """実数直線上のベクトルで一括更新する"""
        self.update(self.from_real_vector(x))

    # --- 事前分布 ---

    def log_prior(self) -> float:
        """固定されていないパラメータの対数事前密度の合計"""
        total = 0.0
        for param in self.free_parameters:
            lp = param.log_prior()
            if not np.isfinite(lp):
                return -np.inf
            total += lp
        return total

    def draw_from_prior(self, rng: np.random.Generator) -> np.ndarray:
        """事前分布から固定されていないパラメータのベクトルを生成する

        値域外のドローは値域の端にクリップする。

        Args:
            rng: NumPy乱数生成器（呼び出し側で管理する）
        """
        draws = []
        for param in self.free_parameters:
            if param.prior is None:
                raise ValidationError(f"推定対象パラメータ {param.key} に事前分布がありません")
            lower, upper = param.valuebounds
            draws.append(float(np.clip(param.prior.sample(rng, size=1)[0], lower, upper)))
        return np.array(draws, dtype=np.float64)
