"""パラメータ変換のテスト"""

import numpy as np
import pytest

from multisector_dsge.core.exceptions import InvalidInputError, OutOfBoundsError
from multisector_dsge.core.transforms import (
    TransformKind,
    to_bounded,
    to_bounded_derivative,
    to_real,
)

UNIT = (1e-5, 0.999)
SPREAD_BOUNDS = (0.0, 100.0)
EXP_ORIGIN = (1e-5, 0.0)


class TestUntransformed:
    """無変換のテスト"""

    def test_identity(self) -> None:
        assert to_real(0.3, (-1.0, 1.0), TransformKind.UNTRANSFORMED, (0.0, 0.0)) == 0.3
        assert to_bounded(0.3, (-1.0, 1.0), TransformKind.UNTRANSFORMED, (0.0, 0.0)) == 0.3

    def test_inverse_is_identity_outside_bounds(self) -> None:
        """値域外の実数もそのまま返す（切り詰めない）"""
        assert to_bounded(5.0, (-1.0, 1.0), TransformKind.UNTRANSFORMED, (0.0, 0.0)) == 5.0


class TestSquareRoot:
    """SquareRoot変換のテスト"""

    def test_center_maps_to_zero(self) -> None:
        """区間の中点は0に写る"""
        center = (UNIT[0] + UNIT[1]) / 2
        assert to_real(center, UNIT, TransformKind.SQUARE_ROOT, UNIT) == pytest.approx(0.0, abs=1e-12)

    def test_formula(self) -> None:
        """r = cx / √(1 - cx²)"""
        a, b = UNIT
        x = 0.7126
        cx = 2 * (x - (a + b) / 2) / (b - a)
        expected = cx / np.sqrt(1 - cx**2)
        assert to_real(x, UNIT, TransformKind.SQUARE_ROOT, UNIT) == pytest.approx(expected)

    def test_inverse_recovers_value(self) -> None:
        for x in [0.1596, 0.5, 0.894]:
            r = to_real(x, UNIT, TransformKind.SQUARE_ROOT, UNIT)
            assert to_bounded(r, UNIT, TransformKind.SQUARE_ROOT, UNIT) == pytest.approx(x, rel=1e-10)

    def test_boundary_value_gives_finite_real(self) -> None:
        """変換区間の端でも有限の実数を返す"""
        upper = to_real(UNIT[1], UNIT, TransformKind.SQUARE_ROOT, UNIT)
        lower = to_real(UNIT[0], UNIT, TransformKind.SQUARE_ROOT, UNIT)
        assert np.isfinite(upper) and upper > 0
        assert np.isfinite(lower) and lower < 0

    def test_value_outside_transform_interval_raises(self) -> None:
        """値域内でも変換区間の外ならエラー"""
        with pytest.raises(OutOfBoundsError):
            to_real(0.995, (1e-5, 0.99999), TransformKind.SQUARE_ROOT, (1e-5, 0.99))

    def test_monotone(self) -> None:
        reals = np.linspace(-50.0, 50.0, 101)
        values = [to_bounded(r, UNIT, TransformKind.SQUARE_ROOT, UNIT) for r in reals]
        assert all(np.diff(values) >= 0)
        assert all(UNIT[0] <= v <= UNIT[1] for v in values)


class TestExponential:
    """Exponential変換のテスト"""

    def test_formula(self) -> None:
        """r = b + log(x - a)"""
        r = to_real(1.7444, SPREAD_BOUNDS, TransformKind.EXPONENTIAL, EXP_ORIGIN)
        assert r == pytest.approx(np.log(1.7444 - 1e-5))

    def test_shifted_formula(self) -> None:
        r = to_real(1.1066, (1.0, 10.0), TransformKind.EXPONENTIAL, (1.0, 10.0))
        assert r == pytest.approx(10.0 + np.log(0.1066))

    def test_inverse_recovers_value(self) -> None:
        r = to_real(2.5975, (1e-5, 10.0), TransformKind.EXPONENTIAL, (1e-5, 10.0))
        assert to_bounded(r, (1e-5, 10.0), TransformKind.EXPONENTIAL, (1e-5, 10.0)) == pytest.approx(
            2.5975, rel=1e-10
        )

    def test_lower_edge_gives_finite_real(self) -> None:
        r = to_real(1e-5, SPREAD_BOUNDS, TransformKind.EXPONENTIAL, EXP_ORIGIN)
        assert np.isfinite(r)

    def test_below_transform_origin_raises(self) -> None:
        """値域内でも変換の下限を下回ればエラー"""
        with pytest.raises(OutOfBoundsError):
            to_real(0.0, SPREAD_BOUNDS, TransformKind.EXPONENTIAL, EXP_ORIGIN)

    def test_inverse_not_clipped_to_upper_bound(self) -> None:
        """値域の上限を超える値も逆変換の式どおりに返す"""
        x = to_bounded(np.log(150.0), SPREAD_BOUNDS, TransformKind.EXPONENTIAL, EXP_ORIGIN)
        assert x == pytest.approx(150.0 + 1e-5, rel=1e-12)

    def test_derivative_matches_inverse_above_upper_bound(self) -> None:
        r = np.log(150.0)
        d = to_bounded_derivative(r, SPREAD_BOUNDS, TransformKind.EXPONENTIAL, EXP_ORIGIN)
        assert d == pytest.approx(150.0, rel=1e-12)


class TestErrors:
    """入力検証のテスト"""

    @pytest.mark.parametrize("transform", list(TransformKind))
    def test_out_of_bounds_value_raises(self, transform: TransformKind) -> None:
        with pytest.raises(OutOfBoundsError):
            to_real(1.5, UNIT, transform, UNIT)

    @pytest.mark.parametrize("transform", list(TransformKind))
    def test_nan_value_raises(self, transform: TransformKind) -> None:
        with pytest.raises(OutOfBoundsError):
            to_real(np.nan, UNIT, transform, UNIT)

    @pytest.mark.parametrize("real", [np.nan, np.inf, -np.inf])
    def test_non_finite_real_raises(self, real: float) -> None:
        with pytest.raises(InvalidInputError):
            to_bounded(real, UNIT, TransformKind.SQUARE_ROOT, UNIT)


class TestDerivative:
    """逆変換の導関数のテスト"""

    @pytest.mark.parametrize(
        ("bounds", "transform", "tparams", "r"),
        [
            (UNIT, TransformKind.SQUARE_ROOT, UNIT, 0.3),
            (UNIT, TransformKind.SQUARE_ROOT, UNIT, -1.7),
            ((1e-5, 10.0), TransformKind.EXPONENTIAL, (1e-5, 10.0), 9.5),
            ((-5.0, 5.0), TransformKind.UNTRANSFORMED, (-5.0, 5.0), 0.2),
        ],
    )
    def test_matches_finite_difference(
        self,
        bounds: tuple[float, float],
        transform: TransformKind,
        tparams: tuple[float, float],
        r: float,
    ) -> None:
        h = 1e-6
        numeric = (
            to_bounded(r + h, bounds, transform, tparams)
            - to_bounded(r - h, bounds, transform, tparams)
        ) / (2 * h)
        assert to_bounded_derivative(r, bounds, transform, tparams) == pytest.approx(
            numeric, rel=1e-5
        )
