"""定常状態ソルバー

パラメータ集合の現在値から定常状態値を計算する。手順は以下の4段階:

1. 均斉成長経路の閉形式（z*, r*, r^k*, w*, L*, k*, i*, y*, c* など）
2. デフォルト確率 F(ω̄) の標準正規分位点 z_ω
3. ζ_spb(z_ω, σ_ω, spr) = ζ_spb となる σ_ω の根探索（初期値0.5、割線法）
4. σ_ω, z_ω から金融摩擦ブロックの弾力性と純資産遷移の弾力性を計算

段階1・2の定義域エラーは InvalidParameterDrawError としてサンプラーに通知する。
段階3の失敗は σ_ω = 0.5 にフォールバックし、例外は外に出さない。
段階4の失敗はロジック上の欠陥として SteadyStateError を送出する。

呼び出し間で状態を持たないため、同じ入力に対しては常に同一の結果を返す。
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import numpy as np
import scipy.optimize
from scipy.special import ndtri

from multisector_dsge.core.exceptions import (
    ConvergenceError,
    InvalidParameterDrawError,
    SteadyStateError,
)
from multisector_dsge.core.financial_frictions import (
    G_fn,
    Gamma_fn,
    d2G_domegadsigma_fn,
    d2Gamma_domegadsigma_fn,
    dG_domega_fn,
    dG_dsigma_fn,
    dGamma_domega_fn,
    dGamma_dsigma_fn,
    mu_fn,
    nk_fn,
    omega_fn,
    zeta_bomega_fn,
    zeta_spb_fn,
    zeta_zomega_fn,
)
from multisector_dsge.parameters.constants import SOLVER_CONSTANTS
from multisector_dsge.parameters.parameter_set import ParameterSet

logger = logging.getLogger(__name__)

# 定常状態計算で参照するパラメータ（スケール後の値を使う）
REQUIRED_PARAMETERS: tuple[str, ...] = (
    "alpha",
    "delta",
    "Upsilon",
    "Phi",
    "lambda_w",
    "beta",
    "pi_star",
    "sigma_c",
    "F_omega",
    "spr",
    "zeta_spb",
    "gamma_star",
    "gamma",
    "g_star",
)

MACRO_KEYS: tuple[str, ...] = (
    "z_star",
    "rstar",
    "Rstarn",
    "r_k_star",
    "wstar",
    "Lstar",
    "kstar",
    "kbarstar",
    "istar",
    "ystar",
    "cstar",
    "wl_c",
)

FINANCIAL_FRICTION_KEYS: tuple[str, ...] = (
    "nstar",
    "vstar",
    "zeta_spsigma_omega",
    "zeta_spmu_e",
    "zeta_nRk",
    "zeta_nR",
    "zeta_nqk",
    "zeta_nn",
    "zeta_nmu_e",
    "zeta_nsigma_omega",
    "z_omega_star",
    "sigma_omega_star",
    "omega_bar_star",
    "mu_e_star",
)

STEADY_STATE_KEYS: tuple[str, ...] = MACRO_KEYS + FINANCIAL_FRICTION_KEYS

_RAISE_ON_DOMAIN_ERROR = {"divide": "raise", "over": "raise", "invalid": "raise"}
_ARITHMETIC_ERRORS = (FloatingPointError, ZeroDivisionError, OverflowError, ValueError)


@dataclass(frozen=True)
class SteadyState:
    """定常状態の計算結果"""

    values: Mapping[str, float]
    z_omega_star: float
    sigma_omega_star: float
    used_fallback: bool = False
    message: str = field(default="", compare=False)

    def __getitem__(self, key: str) -> float:
        return self.values[key]

    def __contains__(self, key: object) -> bool:
        return key in self.values


class SteadyStateSolver:
    """定常状態ソルバー

    パラメータ集合は読み取るだけで変更しない。結果の書き込みは steadystate() が行う。
    """

    def __init__(self, params: ParameterSet) -> None:
        self.params = params

    def solve(self) -> SteadyState:
        """定常状態を計算する

        Raises:
            InvalidParameterDrawError: 閉形式の計算で定義域エラーが発生した場合
            SteadyStateError: 弾力性の計算で定義域エラーが発生した場合
        """
        p = self._read_parameters()
        macro = self._solve_macro_block(p)
        z_omega = self._default_threshold(p["F_omega"])

        used_fallback = False
        message = "σ_ωの根探索が収束しました"
        try:
            sigma_omega = self._find_sigma_omega(z_omega, p["spr"], p["zeta_spb"])
        except ConvergenceError as e:
            sigma_omega = np.float64(SOLVER_CONSTANTS.sigma_omega_fallback)
            used_fallback = True
            message = f"σ_ωの根探索に失敗したため既定値を使用: {e}"
            logger.debug(
                "σ_ωの根探索に失敗 (spr=%.6g, ζ_spb=%.6g): %s", p["spr"], p["zeta_spb"], e
            )

        frictions = self._solve_financial_block(p, macro, z_omega, sigma_omega)

        values = {key: float(v) for key, v in (macro | frictions).items()}
        return SteadyState(
            values=values,
            z_omega_star=float(z_omega),
            sigma_omega_star=float(sigma_omega),
            used_fallback=used_fallback,
            message=message,
        )

    def _read_parameters(self) -> dict[str, np.float64]:
        return {key: np.float64(self.params[key]) for key in REQUIRED_PARAMETERS}

    def _solve_macro_block(self, p: Mapping[str, np.float64]) -> dict[str, np.float64]:
        """均斉成長経路の閉形式解"""
        alpha = p["alpha"]
        delta = p["delta"]
        upsilon = p["Upsilon"]
        gamma = p["gamma"]
        labor = np.float64(SOLVER_CONSTANTS.steady_state_labor)

        try:
            with np.errstate(**_RAISE_ON_DOMAIN_ERROR):
                z_star = np.log(1 + gamma) + alpha / (1 - alpha) * np.log(upsilon)
                rstar = np.exp(p["sigma_c"] * z_star) / p["beta"]
                Rstarn = 100 * (rstar * p["pi_star"] - 1)
                r_k_star = p["spr"] * rstar * upsilon - (1 - delta)
                wstar = (
                    alpha**alpha
                    * (1 - alpha) ** (1 - alpha)
                    * r_k_star ** (-alpha)
                    / p["Phi"]
                ) ** (1 / (1 - alpha))
                kstar = (alpha / (1 - alpha)) * wstar * labor / r_k_star
                growth = (1 + gamma) * upsilon ** (1 / (1 - alpha))
                kbarstar = kstar * growth
                istar = kbarstar * (1 - (1 - delta) / growth)
                ystar = kstar**alpha * labor ** (1 - alpha) / p["Phi"]
                cstar = (1 - p["g_star"]) * ystar - istar
                wl_c = (wstar * labor) / (cstar * p["lambda_w"])
        except _ARITHMETIC_ERRORS as e:
            raise InvalidParameterDrawError(f"定常状態の閉形式計算に失敗しました: {e}") from e

        macro = {
            "z_star": z_star,
            "rstar": rstar,
            "Rstarn": Rstarn,
            "r_k_star": r_k_star,
            "wstar": wstar,
            "Lstar": labor,
            "kstar": kstar,
            "kbarstar": kbarstar,
            "istar": istar,
            "ystar": ystar,
            "cstar": cstar,
            "wl_c": wl_c,
        }
        bad = [key for key, v in macro.items() if not np.isfinite(v)]
        if bad:
            raise InvalidParameterDrawError(f"定常状態値が有限ではありません: {', '.join(bad)}")
        return macro

    @staticmethod
    def _default_threshold(f_omega: np.float64) -> np.float64:
        """デフォルト確率に対応する標準正規分位点 z_ω"""
        z_omega = ndtri(f_omega)
        if not np.isfinite(z_omega):
            raise InvalidParameterDrawError(
                f"デフォルト確率 F(ω)={f_omega} から閾値を計算できません"
            )
        return z_omega

    @staticmethod
    def _find_sigma_omega(z_omega: np.float64, spr: np.float64, target: np.float64) -> np.float64:
        """ζ_spb(z_ω, σ, spr) = ζ_spb を満たす σ > 0 を割線法で求める

        Raises:
            ConvergenceError: 非収束・定義域エラー・非正の解の場合
        """

        def objective(sigma: float) -> np.float64:
            return zeta_spb_fn(z_omega, sigma, spr) - target

        try:
            with np.errstate(**_RAISE_ON_DOMAIN_ERROR):
                sigma = scipy.optimize.newton(
                    objective,
                    x0=SOLVER_CONSTANTS.sigma_omega_initial_guess,
                    tol=SOLVER_CONSTANTS.root_tolerance,
                    maxiter=SOLVER_CONSTANTS.root_max_iterations,
                )
        except (RuntimeError, *_ARITHMETIC_ERRORS) as e:
            raise ConvergenceError(str(e)) from e

        sigma = np.float64(sigma)
        if not np.isfinite(sigma) or sigma <= 0:
            raise ConvergenceError(f"σ_ωの解が正の有限値ではありません: {sigma}")
        return sigma

    @staticmethod
    def _solve_financial_block(
        p: Mapping[str, np.float64],
        macro: Mapping[str, np.float64],
        z: np.float64,
        sigma: np.float64,
    ) -> dict[str, np.float64]:
        """金融摩擦ブロックの定常状態と純資産遷移の弾力性"""
        spr = p["spr"]
        beta = p["beta"]
        gamma_star = p["gamma_star"]
        pi_star = p["pi_star"]

        try:
            with np.errstate(**_RAISE_ON_DOMAIN_ERROR):
                omega_bar_star = omega_fn(z, sigma)

                G_star = G_fn(z, sigma)
                Gamma_star = Gamma_fn(z, sigma)
                dG_domega_star = dG_domega_fn(z, sigma)
                dGamma_domega_star = dGamma_domega_fn(z)
                dG_dsigma_star = dG_dsigma_fn(z, sigma)
                d2G_domegadsigma_star = d2G_domegadsigma_fn(z, sigma)
                dGamma_dsigma_star = dGamma_dsigma_fn(z, sigma)
                d2Gamma_domegadsigma_star = d2Gamma_domegadsigma_fn(z, sigma)

                mu_e_star = mu_fn(z, sigma, spr)
                nk_star = nk_fn(z, sigma, spr)
                rho_star = 1 / nk_star - 1

                # 企業家の退出時の純資産と新規参入の純資産（資本比）
                wek_star = (1 - gamma_star / beta) * nk_star - gamma_star / beta * (
                    spr * (1 - mu_e_star * G_star) - 1
                )
                vk_star = (nk_star - wek_star) / gamma_star

                nstar = nk_star * macro["kstar"]
                vstar = vk_star * macro["kstar"]

                gamma_mu_g = Gamma_star - mu_e_star * G_star
                gamma_mu_g_prime = dGamma_domega_star - mu_e_star * dG_domega_star

                # ω̄ に関する弾力性
                zeta_bw = zeta_bomega_fn(z, sigma, spr)
                zeta_zw = zeta_zomega_fn(z, sigma, spr)
                zeta_bw_zw = zeta_bw / zeta_zw

                # σ_ω に関する弾力性
                zeta_bsigma = (
                    sigma
                    * (
                        (
                            (1 - mu_e_star * dG_dsigma_star / dGamma_dsigma_star)
                            / (1 - mu_e_star * dG_domega_star / dGamma_domega_star)
                            - 1
                        )
                        * dGamma_dsigma_star
                        * spr
                        + mu_e_star
                        * nk_star
                        * (
                            dG_domega_star * d2Gamma_domegadsigma_star
                            - dGamma_domega_star * d2G_domegadsigma_star
                        )
                        / gamma_mu_g_prime**2
                    )
                    / (
                        (1 - Gamma_star) * spr
                        + dGamma_domega_star / gamma_mu_g_prime * (1 - nk_star)
                    )
                )
                zeta_zsigma = sigma * (dGamma_dsigma_star - mu_e_star * dG_dsigma_star) / gamma_mu_g
                zeta_spsigma_omega = (zeta_bw_zw * zeta_zsigma - zeta_bsigma) / (1 - zeta_bw_zw)

                # μ_e に関する弾力性
                zeta_bmu = (
                    mu_e_star
                    * (
                        nk_star * dGamma_domega_star * dG_domega_star / gamma_mu_g_prime
                        + dGamma_domega_star * G_star * spr
                    )
                    / (
                        (1 - Gamma_star) * gamma_mu_g_prime * spr
                        + dGamma_domega_star * (1 - nk_star)
                    )
                )
                zeta_zmu = -mu_e_star * G_star / gamma_mu_g
                zeta_spmu_e = (zeta_bw_zw * zeta_zmu - zeta_bmu) / (1 - zeta_bw_zw)

                Rk_star = spr * pi_star * macro["rstar"]
                zeta_gw = dG_domega_star / G_star * omega_bar_star
                zeta_Gsigma = dG_dsigma_star / G_star * sigma

                # 純資産遷移の弾力性
                leverage_return = (
                    gamma_star * Rk_star / pi_star / np.exp(macro["z_star"]) * (1 + rho_star)
                )
                zeta_nRk = leverage_return * (1 - mu_e_star * G_star * (1 - zeta_gw / zeta_zw))
                zeta_nR = (
                    gamma_star
                    / beta
                    * (1 + rho_star)
                    * (1 - nk_star + mu_e_star * G_star * spr * zeta_gw / zeta_zw)
                )
                zeta_nqk = leverage_return * (
                    1 - mu_e_star * G_star * (1 + zeta_gw / zeta_zw / rho_star)
                ) - gamma_star / beta * (1 + rho_star)
                zeta_nn = (
                    gamma_star / beta
                    + leverage_return * mu_e_star * G_star * zeta_gw / zeta_zw / rho_star
                )
                zeta_nmu_e = (
                    leverage_return * mu_e_star * G_star * (1 - zeta_gw * zeta_zmu / zeta_zw)
                )
                zeta_nsigma_omega = (
                    leverage_return
                    * mu_e_star
                    * G_star
                    * (zeta_Gsigma - zeta_gw / zeta_zw * zeta_zsigma)
                )
        except _ARITHMETIC_ERRORS as e:
            raise SteadyStateError(
                f"金融摩擦ブロックの計算に失敗しました (z_ω={z}, σ_ω={sigma}): {e}"
            ) from e

        frictions = {
            "nstar": nstar,
            "vstar": vstar,
            "zeta_spsigma_omega": zeta_spsigma_omega,
            "zeta_spmu_e": zeta_spmu_e,
            "zeta_nRk": zeta_nRk,
            "zeta_nR": zeta_nR,
            "zeta_nqk": zeta_nqk,
            "zeta_nn": zeta_nn,
            "zeta_nmu_e": zeta_nmu_e,
            "zeta_nsigma_omega": zeta_nsigma_omega,
            "z_omega_star": z,
            "sigma_omega_star": sigma,
            "omega_bar_star": omega_bar_star,
            "mu_e_star": mu_e_star,
        }
        bad = [key for key, v in frictions.items() if not np.isfinite(v)]
        if bad:
            raise SteadyStateError(f"金融摩擦ブロックの値が有限ではありません: {', '.join(bad)}")
        return frictions


def steadystate(params: ParameterSet) -> SteadyState:
    """定常状態を計算し、パラメータ集合の定常状態値に書き込む

    パラメータが更新されるたびに呼び出す必要がある。失敗時は何も書き込まない。
    """
    result = SteadyStateSolver(params).solve()
    params.assign_steady_state({key: result[key] for key in STEADY_STATE_KEYS})
    return result
