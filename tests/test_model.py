"""モデル本体のテスト"""

import re

import numpy as np
import pytest

from multisector_dsge.core.exceptions import (
    DuplicateKeyError,
    FixedParameterError,
    InvalidDimensionError,
    InvalidParameterDrawError,
    OutOfBoundsError,
    UnknownKeyError,
    ValidationError,
)
from multisector_dsge.core.indices import IndexCategory
from multisector_dsge.core.model import CarvalhoModel
from multisector_dsge.parameters.settings import Setting

ANTICIPATED = re.compile(r"sigma_r_m\d+$")


@pytest.fixture
def model() -> CarvalhoModel:
    return CarvalhoModel()


class TestConstruction:
    """モデル構築のテスト"""

    def test_defaults(self, model: CarvalhoModel) -> None:
        assert model.spec == "carvalho"
        assert model.subspec == "ss2"
        assert model.n_sectors == 1
        assert not model.testing
        assert "N=1" in model.description

    def test_n_sectors_read_only(self, model: CarvalhoModel) -> None:
        with pytest.raises(AttributeError):
            model.n_sectors = 2  # type: ignore[misc]

    @pytest.mark.parametrize("n", [0, -2])
    def test_invalid_n_raises(self, n: int) -> None:
        with pytest.raises(InvalidDimensionError):
            CarvalhoModel(n)

    def test_unknown_subspec_raises(self) -> None:
        with pytest.raises(ValidationError, match="ss99"):
            CarvalhoModel(1, "ss99")

    def test_indices_follow_n(self) -> None:
        model = CarvalhoModel(3)
        assert model.indices.sizes()["endogenous_states"] == 27
        assert model.index(IndexCategory.OBSERVABLES, "obs_pik3") == 4
        assert model.index("exogenous_shocks", "dk1_sh") == 6

    def test_sector_rigidities(self) -> None:
        model = CarvalhoModel(3)
        for n in (1, 2, 3):
            p = model.parameters.get(f"alphak{n}")
            assert p.fixed
            assert p.value == 0.5
        assert "alphak4" not in model.parameters

    def test_steady_state_solved_on_construction(self, model: CarvalhoModel) -> None:
        assert all(np.isfinite(p.value) for p in model.parameters.steady_state)


class TestAnticipatedShocks:
    """先行政策ショックの標準偏差"""

    def test_count_follows_padding(self, model: CarvalhoModel) -> None:
        keys = [p.key for p in model.parameters.parameters if ANTICIPATED.match(p.key)]
        assert len(keys) == model.n_anticipated_shocks_padding == 20

    def test_first_twelve_estimated(self, model: CarvalhoModel) -> None:
        free = [k for k in model.parameters.free_names if ANTICIPATED.match(k)]
        assert free == [f"sigma_r_m{i}" for i in range(1, 13)]
        assert model["sigma_r_m1"] == 0.2

    def test_rest_fixed_at_zero(self, model: CarvalhoModel) -> None:
        p = model.parameters.get("sigma_r_m13")
        assert p.fixed
        assert p.value == 0.0
        assert p.valuebounds == (0.0, 0.0)


class TestSettings:
    """設定のテスト"""

    def test_default_settings(self, model: CarvalhoModel) -> None:
        assert model.n_anticipated_shocks == 6
        assert model.n_anticipated_shocks_padding == 20
        assert model.n_anticipated_lags == 24

    def test_test_settings_take_precedence(self) -> None:
        model = CarvalhoModel(testing=True)
        model.add_setting(Setting("n_anticipated_lags", 2), test=True)
        assert model.get_setting("n_anticipated_lags") == 2
        assert model.settings["n_anticipated_lags"].value == 24

    def test_test_settings_ignored_outside_testing(self, model: CarvalhoModel) -> None:
        model.add_setting(Setting("tolerance", 1e-3), test=True)
        with pytest.raises(UnknownKeyError):
            model.get_setting("tolerance")

    def test_duplicate_setting_raises(self, model: CarvalhoModel) -> None:
        with pytest.raises(DuplicateKeyError):
            model.add_setting(Setting("n_anticipated_shocks", 8))


class TestSubspecs:
    """サブスペックのテスト"""

    def test_ss3_fixes_indexation(self) -> None:
        model = CarvalhoModel(1, "ss3")
        assert model["iota_p"] == 0.0
        assert model["iota_w"] == 0.0
        assert "iota_p" not in model.parameters.free_names
        baseline = CarvalhoModel()
        assert len(model.parameters.free_names) == len(baseline.parameters.free_names) - 2

    def test_ss4_overrides_fixed_parameter(self) -> None:
        model = CarvalhoModel(1, "ss4")
        assert model["Iendoalpha"] == 1.0
        assert model.parameters.get("Iendoalpha").fixed


class TestUpdate:
    """パラメータ更新のテスト"""

    def test_update_resolves_steady_state(self, model: CarvalhoModel) -> None:
        kstar = model["kstar"]
        values = model.parameters.free_values()
        values[model.parameters.free_names.index("alpha")] = 0.3
        model.update(values)
        assert model["alpha"] == 0.3
        assert model["kstar"] != kstar
        assert model.steady_state_result["kstar"] == model["kstar"]

    def test_out_of_bounds_rejected_without_change(self, model: CarvalhoModel) -> None:
        before = model.parameters.free_values()
        values = before.copy()
        values[0] = 5.0
        with pytest.raises(OutOfBoundsError):
            model.update(values)
        np.testing.assert_array_equal(model.parameters.free_values(), before)

    def test_wrong_length_rejected(self, model: CarvalhoModel) -> None:
        with pytest.raises(ValidationError):
            model.update(np.zeros(3))

    def test_fixed_parameter_cannot_be_set_directly(self, model: CarvalhoModel) -> None:
        with pytest.raises(FixedParameterError):
            model.parameters.get("delta").set_value(0.03)

    def test_invalid_draw_restores_parameters(self, model: CarvalhoModel) -> None:
        """定常状態が定義できないドローは棄却され、更新前の状態に戻る"""
        model.parameters.override("delta", -1.0)
        before = model.parameters.free_values()
        kstar = model["kstar"]
        values = before.copy()
        values[model.parameters.free_names.index("alpha")] = 0.3
        with pytest.raises(InvalidParameterDrawError):
            model.update(values)
        np.testing.assert_array_equal(model.parameters.free_values(), before)
        assert model["kstar"] == kstar

    def test_update_from_real(self, model: CarvalhoModel) -> None:
        x = model.parameters.to_real_vector()
        original = model.parameters.free_values()
        values = original.copy()
        values[model.parameters.free_names.index("h")] = 0.8
        model.update(values)
        model.update_from_real(x)
        np.testing.assert_allclose(model.parameters.free_values(), original, rtol=1e-9)

    def test_update_from_real_out_of_bounds_rejected(self, model: CarvalhoModel) -> None:
        """psi2の実数値5.0は値域(-0.5, 0.5)の外に写るため棄却される"""
        before = model.parameters.free_values()
        x = model.parameters.to_real_vector()
        x[model.parameters.free_names.index("psi2")] = 5.0
        with pytest.raises(OutOfBoundsError):
            model.update_from_real(x)
        np.testing.assert_array_equal(model.parameters.free_values(), before)

    def test_log_prior_finite(self, model: CarvalhoModel) -> None:
        assert np.isfinite(model.log_prior())
