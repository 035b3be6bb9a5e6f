"""多部門粘着価格DSGEモデル本体

設定・パラメータ・定常状態値・変数インデックスを保持し、
パラメータ更新のたびに定常状態を再計算する。

構築順序:
    インデックス（部門数の検証） → 設定 → パラメータ → 定常状態値 → サブスペック → 定常状態
"""

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np

from multisector_dsge.core.exceptions import DuplicateKeyError, SolverError, UnknownKeyError
from multisector_dsge.core.indices import IndexCategory, ModelIndices, build_indices
from multisector_dsge.core.steady_state import SteadyState, steadystate
from multisector_dsge.parameters.constants import MODEL_DIMENSIONS
from multisector_dsge.parameters.defaults import default_parameters, steady_state_parameters
from multisector_dsge.parameters.parameter_set import ParameterSet
from multisector_dsge.parameters.settings import DEFAULT_SETTINGS, DEFAULT_TEST_SETTINGS, Setting
from multisector_dsge.parameters.subspecs import apply_subspec

logger = logging.getLogger(__name__)


class CarvalhoModel:
    """BGG金融摩擦付き多部門粘着価格DSGEモデル

    Attributes:
        spec: モデル名
        subspec: サブスペック名
        settings: 設定
        test_settings: テスト用設定（testing=Trueのとき優先）
        testing: テストモードかどうか
        parameters: パラメータと定常状態値
        indices: 変数インデックス
    """

    spec = "carvalho"

    def __init__(
        self,
        n_sectors: int = MODEL_DIMENSIONS.default_n_sectors,
        subspec: str = MODEL_DIMENSIONS.default_subspec,
        *,
        testing: bool = False,
    ) -> None:
        # 部門数の検証をパラメータ生成より先に行う
        self.indices: ModelIndices = build_indices(n_sectors)
        self._n_sectors = n_sectors
        self.subspec = subspec
        self.testing = testing

        self.settings: dict[str, Setting] = {}
        self.test_settings: dict[str, Setting] = {}
        for setting in DEFAULT_SETTINGS:
            self.add_setting(setting)
        for setting in DEFAULT_TEST_SETTINGS:
            self.add_setting(setting, test=True)

        self.parameters = ParameterSet()
        for param in default_parameters(n_sectors, self.n_anticipated_shocks_padding):
            self.parameters.add_parameter(param)
        for ss_param in steady_state_parameters():
            self.parameters.add_parameter(ss_param)

        apply_subspec(self.parameters, subspec)
        self._steady_state: SteadyState = steadystate(self.parameters)

    @property
    def n_sectors(self) -> int:
        """部門数N"""
        return self._n_sectors

    @property
    def description(self) -> str:
        return f"多部門粘着価格DSGEモデル（Carvalho-Lee型, N={self.n_sectors}, {self.subspec}）"

    def __repr__(self) -> str:
        return f"CarvalhoModel(n_sectors={self.n_sectors}, subspec={self.subspec!r})"

    # --- 設定 ---

    def add_setting(self, setting: Setting, *, test: bool = False) -> None:
        """設定を追加する

        Raises:
            DuplicateKeyError: 同じキーが既に存在する場合
        """
        target = self.test_settings if test else self.settings
        if setting.key in target:
            raise DuplicateKeyError(f"設定キーが重複しています: {setting.key}")
        target[setting.key] = setting

    def get_setting(self, key: str) -> Any:
        """設定値を返す（テストモードではテスト用設定を優先）"""
        if self.testing and key in self.test_settings:
            return self.test_settings[key].value
        try:
            return self.settings[key].value
        except KeyError:
            raise UnknownKeyError(f"未知の設定キーです: {key}") from None

    @property
    def n_anticipated_shocks(self) -> int:
        return int(self.get_setting("n_anticipated_shocks"))

    @property
    def n_anticipated_shocks_padding(self) -> int:
        return int(self.get_setting("n_anticipated_shocks_padding"))

    @property
    def n_anticipated_lags(self) -> int:
        return int(self.get_setting("n_anticipated_lags"))

    # --- 参照 ---

    def __getitem__(self, key: str) -> float:
        """パラメータのスケール後の値、または定常状態値"""
        return self.parameters[key]

    def index(self, category: IndexCategory | str, name: str) -> int:
        return self.indices.index(category, name)

    @property
    def steady_state_result(self) -> SteadyState:
        """直近の定常状態計算の結果"""
        return self._steady_state

    # --- 更新 ---

    def steadystate(self) -> SteadyState:
        """現在のパラメータで定常状態を再計算する"""
        self._steady_state = steadystate(self.parameters)
        return self._steady_state

    def update(self, values: Sequence[float] | np.ndarray) -> None:
        """推定対象パラメータを一括更新し、定常状態を再計算する

        定常状態の計算に失敗した場合はパラメータを更新前の値に戻してから
        例外を送出するため、部分的な更新は観測されない。

        Raises:
            ValidationError: ベクトル長・値域の不正
            InvalidParameterDrawError: パラメータの組み合わせで定常状態が定義できない場合
        """
        previous = self.parameters.free_values()
        self.parameters.update(values)
        try:
            self.steadystate()
        except SolverError as e:
            logger.debug("パラメータドローを棄却: %s", e)
            self.parameters.update(previous)
            raise

    def update_from_real(self, x: Sequence[float] | np.ndarray) -> None:
        """実数直線上のベクトルで更新する"""
        self.update(self.parameters.from_real_vector(x))

    def log_prior(self) -> float:
        return self.parameters.log_prior()
