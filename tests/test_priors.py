"""事前分布のテスト"""

import numpy as np
import pytest
from scipy.special import gammaln

from multisector_dsge.estimation.priors import (
    BetaAlt,
    DistributionType,
    GammaAlt,
    Normal,
    ParameterPrior,
    RootInverseGamma,
)


class TestParameterPrior:
    """ParameterPriorのテスト"""

    @pytest.mark.parametrize(
        ("prior", "value"),
        [
            (Normal(0.30, 0.05), 0.3),
            (BetaAlt(0.5, 0.1), 0.3),
            (GammaAlt(2.0, 0.1), 2.0),
            (RootInverseGamma(2.0, 0.1), 0.3),
        ],
    )
    def test_log_pdf_finite_inside_support(self, prior: ParameterPrior, value: float) -> None:
        assert np.isfinite(prior.log_pdf(value))

    def test_dist_type(self) -> None:
        assert RootInverseGamma(2.0, 0.1).dist_type is DistributionType.ROOT_INV_GAMMA

    def test_beta_log_pdf_negative_inf_outside_support(self) -> None:
        prior = BetaAlt(0.7, 0.1)
        assert prior.log_pdf(-0.1) == -np.inf
        assert prior.log_pdf(1.1) == -np.inf

    def test_gamma_log_pdf_negative_inf_for_negative(self) -> None:
        assert GammaAlt(0.25, 0.1).log_pdf(-1.0) == -np.inf

    def test_root_inverse_gamma_non_positive(self) -> None:
        prior = RootInverseGamma(4.0, 0.2)
        assert prior.log_pdf(0.0) == -np.inf
        assert prior.log_pdf(-0.1) == -np.inf

    def test_root_inverse_gamma_density(self) -> None:
        """p(σ) = 2 b^a / Γ(a) σ^(-ν-1) exp(-b/σ²), a = ν/2, b = ντ²/2"""
        nu, tau, sigma = 4.0, 0.2, 0.25
        a, b = nu / 2, nu * tau**2 / 2
        expected = np.log(2) + a * np.log(b) - gammaln(a) - (nu + 1) * np.log(sigma) - b / sigma**2
        assert RootInverseGamma(nu, tau).log_pdf(sigma) == pytest.approx(expected)

    def test_beta_mean_std_parameterization(self) -> None:
        prior = BetaAlt(0.75, 0.15)
        dist = prior._get_scipy_dist()
        assert dist.mean() == pytest.approx(0.75)
        assert dist.std() == pytest.approx(0.15)

    def test_gamma_mean_std_parameterization(self) -> None:
        dist = GammaAlt(0.25, 0.1)._get_scipy_dist()
        assert dist.mean() == pytest.approx(0.25)
        assert dist.std() == pytest.approx(0.1)

    def test_invalid_beta_raises(self) -> None:
        with pytest.raises(ValueError, match="Beta"):
            BetaAlt(0.5, 0.6)

    def test_non_positive_std_raises(self) -> None:
        with pytest.raises(ValueError):
            Normal(0.0, 0.0)

    def test_frozen(self) -> None:
        prior = Normal(0.0, 1.0)
        with pytest.raises(AttributeError):
            prior.a = 1.0  # type: ignore[misc]


class TestSampling:
    """サンプリングのテスト"""

    def test_sample_shape(self) -> None:
        rng = np.random.default_rng(0)
        samples = BetaAlt(0.5, 0.2).sample(rng, size=100)
        assert samples.shape == (100,)
        assert np.all((samples > 0) & (samples < 1))

    def test_root_inverse_gamma_samples_positive(self) -> None:
        rng = np.random.default_rng(0)
        samples = RootInverseGamma(2.0, 0.1).sample(rng, size=200)
        assert np.all(samples > 0)

    def test_reproducible_with_same_seed(self) -> None:
        prior = GammaAlt(2.0, 0.1)
        a = prior.sample(np.random.default_rng(7), size=5)
        b = prior.sample(np.random.default_rng(7), size=5)
        np.testing.assert_array_equal(a, b)

    def test_sample_mean_close_to_prior_mean(self) -> None:
        rng = np.random.default_rng(1)
        samples = Normal(1.5, 0.25).sample(rng, size=20_000)
        assert samples.mean() == pytest.approx(1.5, abs=0.01)
