"""パラメータマッピングのテスト"""

import numpy as np
import pytest

from multisector_dsge.core.exceptions import OutOfBoundsError, ValidationError
from multisector_dsge.core.model import CarvalhoModel
from multisector_dsge.core.transforms import TransformKind
from multisector_dsge.estimation.parameter_mapping import ParameterMapping, ParameterSpec


class TestParameterSpec:
    """ParameterSpecのテスト"""

    def test_frozen(self) -> None:
        """immutableであることを確認"""
        spec = ParameterSpec("alpha", 0.16, 1e-5, 0.999, TransformKind.SQUARE_ROOT, (1e-5, 0.999))
        with pytest.raises(AttributeError):
            spec.name = "changed"  # type: ignore[misc]
        assert spec.bounds == (1e-5, 0.999)


class TestParameterMapping:
    """ParameterMappingのテスト"""

    def setup_method(self) -> None:
        self.model = CarvalhoModel()
        self.mapping = ParameterMapping.from_model(self.model)

    def test_n_params_consistency(self) -> None:
        """n_paramsが推定対象パラメータ数と一致"""
        assert self.mapping.n_params == len(self.model.parameters.free_parameters)
        assert self.mapping.n_params == len(self.mapping.names)
        assert self.mapping.n_params == len(self.mapping.defaults())
        assert self.mapping.n_params == len(self.mapping.bounds())

    def test_names_follow_declaration_order(self) -> None:
        assert self.mapping.names == self.model.parameters.free_names
        assert self.mapping.index_of("alpha") == 0

    def test_fixed_parameter_not_mapped(self) -> None:
        with pytest.raises(ValidationError):
            self.mapping.index_of("delta")

    def test_bounds_valid(self) -> None:
        """全バウンドで下限<上限、デフォルト値がバウンド内"""
        defaults = self.mapping.defaults()
        for i, (lb, ub) in enumerate(self.mapping.bounds()):
            assert lb < ub, f"パラメータ {self.mapping.names[i]}: 下限({lb}) >= 上限({ub})"
            assert lb <= defaults[i] <= ub

    def test_params_to_theta_matches_defaults(self) -> None:
        theta = self.mapping.params_to_theta(self.model.parameters)
        np.testing.assert_array_equal(theta, self.mapping.defaults())

    def test_real_line_round_trip(self) -> None:
        theta = self.mapping.defaults()
        x = self.mapping.to_real(theta)
        assert np.all(np.isfinite(x))
        np.testing.assert_allclose(self.mapping.to_model(x), theta, rtol=1e-9)

    def test_to_real_rejects_out_of_bounds(self) -> None:
        theta = self.mapping.defaults()
        theta[self.mapping.index_of("alpha")] = 1.5
        with pytest.raises(OutOfBoundsError):
            self.mapping.to_real(theta)

    def test_wrong_length_raises(self) -> None:
        with pytest.raises(ValidationError, match="長さ"):
            self.mapping.to_model(np.zeros(self.mapping.n_params + 1))

    def test_jacobian_is_positive_diagonal(self) -> None:
        x = self.mapping.to_real(self.mapping.defaults())
        jac = self.mapping.jacobian(x)
        assert jac.shape == (self.mapping.n_params, self.mapping.n_params)
        np.testing.assert_array_equal(jac, np.diag(np.diag(jac)))
        assert np.all(np.diag(jac) > 0)
        assert np.isfinite(self.mapping.log_abs_det_jacobian(x))

    def test_jacobian_matches_finite_difference(self) -> None:
        x = self.mapping.to_real(self.mapping.defaults())
        jac = np.diag(self.mapping.jacobian(x))
        h = 1e-6
        for name in ["alpha", "spr", "beta", "sigma_g", "Lmean"]:
            i = self.mapping.index_of(name)
            up, down = x.copy(), x.copy()
            up[i] += h
            down[i] -= h
            numeric = (self.mapping.to_model(up)[i] - self.mapping.to_model(down)[i]) / (2 * h)
            assert jac[i] == pytest.approx(numeric, rel=1e-5), name

    def test_apply_updates_model(self) -> None:
        theta = self.mapping.defaults()
        theta[self.mapping.index_of("zeta_spb")] = 0.05
        self.mapping.apply(self.model, theta)
        assert self.model["zeta_spb"] == 0.05
        assert np.isfinite(self.model["sigma_omega_star"])

    def test_apply_rejects_mismatched_model(self) -> None:
        other = CarvalhoModel(1, "ss3")
        with pytest.raises(ValidationError):
            self.mapping.apply(other, self.mapping.defaults())
