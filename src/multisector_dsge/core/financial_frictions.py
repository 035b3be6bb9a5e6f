"""BGG型金融摩擦ブロックの補助関数

企業家の資本に掛かる個別ショック ω は対数正規分布に従い、
デフォルト閾値 ω̄ は標準正規分位点 z を用いて ω̄ = exp(σz - σ²/2) と表す。

    G(z, σ)  = Φ(z - σ)                      ω̄以下の部分期待値
    Γ(z, σ)  = ω̄(1 - Φ(z)) + Φ(z - σ)        貸し手の取り分
    μ        = 監視費用の比率
    nk       = 純資産/資本比率
    ζ_spb    = スプレッドのレバレッジ弾力性

Φ, φ は標準正規分布のCDF・PDF。引数はnp.float64を想定し、
呼び出し側の np.errstate で定義域エラーを例外化できるようにしている。
"""

import numpy as np
from scipy.special import ndtr

_SQRT_2PI = np.sqrt(2.0 * np.pi)


def norm_pdf(x: float) -> np.float64:
    """標準正規分布の確率密度"""
    x = np.float64(x)
    return np.exp(-0.5 * x * x) / _SQRT_2PI


def norm_cdf(x: float) -> np.float64:
    """標準正規分布の累積分布"""
    return ndtr(np.float64(x))


def omega_fn(z: float, sigma: float) -> np.float64:
    """デフォルト閾値 ω̄ = exp(σz - σ²/2)"""
    sigma = np.float64(sigma)
    return np.exp(sigma * z - sigma**2 / 2)


def G_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return norm_cdf(z - sigma)


def Gamma_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return omega_fn(z, sigma) * (1 - norm_cdf(z)) + norm_cdf(z - sigma)


def dG_domega_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return norm_pdf(z) / np.float64(sigma)


def d2G_domega2_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return -z * norm_pdf(z) / omega_fn(z, sigma) / np.float64(sigma) ** 2


def dGamma_domega_fn(z: float) -> np.float64:  # noqa: N802
    return 1 - norm_cdf(z)


def d2Gamma_domega2_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return -norm_pdf(z) / omega_fn(z, sigma) / np.float64(sigma)


def dG_dsigma_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return -z * norm_pdf(z - sigma) / np.float64(sigma)


def d2G_domegadsigma_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return -norm_pdf(z) * (1 - z * (z - sigma)) / np.float64(sigma) ** 2


def dGamma_dsigma_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return -norm_pdf(z - sigma)


def d2Gamma_domegadsigma_fn(z: float, sigma: float) -> np.float64:  # noqa: N802
    return (z / np.float64(sigma) - 1) * norm_pdf(z)


def mu_fn(z: float, sigma: float, spr: float) -> np.float64:
    """監視費用 μ

    ゼロ利潤条件とスプレッド spr から逆算する。
    """
    spr = np.float64(spr)
    return (1 - 1 / spr) / (
        dG_domega_fn(z, sigma) / dGamma_domega_fn(z) * (1 - Gamma_fn(z, sigma))
        + G_fn(z, sigma)
    )


def nk_fn(z: float, sigma: float, spr: float) -> np.float64:
    """純資産/資本比率 n/k"""
    return 1 - (Gamma_fn(z, sigma) - mu_fn(z, sigma, spr) * G_fn(z, sigma)) * np.float64(spr)


def zeta_bomega_fn(z: float, sigma: float, spr: float) -> np.float64:
    """レバレッジの ω̄ 弾力性 ζ_bω"""
    spr = np.float64(spr)
    nk = nk_fn(z, sigma, spr)
    mu_star = mu_fn(z, sigma, spr)
    omega_star = omega_fn(z, sigma)
    Gamma_star = Gamma_fn(z, sigma)
    G_star = G_fn(z, sigma)
    dGamma_domega_star = dGamma_domega_fn(z)
    dG_domega_star = dG_domega_fn(z, sigma)
    d2Gamma_domega2_star = d2Gamma_domega2_fn(z, sigma)
    d2G_domega2_star = d2G_domega2_fn(z, sigma)

    gamma_mu_g_prime = dGamma_domega_star - mu_star * dG_domega_star
    return (
        omega_star
        * mu_star
        * nk
        * (d2Gamma_domega2_star * dG_domega_star - d2G_domega2_star * dGamma_domega_star)
        / gamma_mu_g_prime**2
        / spr
        / (
            1
            - Gamma_star
            + dGamma_domega_star * (Gamma_star - mu_star * G_star) / gamma_mu_g_prime
        )
    )


def zeta_zomega_fn(z: float, sigma: float, spr: float) -> np.float64:
    """収益率の ω̄ 弾力性 ζ_zω"""
    mu_star = mu_fn(z, sigma, spr)
    return (
        omega_fn(z, sigma)
        * (dGamma_domega_fn(z) - mu_star * dG_domega_fn(z, sigma))
        / (Gamma_fn(z, sigma) - mu_star * G_fn(z, sigma))
    )


def zeta_spb_fn(z: float, sigma: float, spr: float) -> np.float64:
    """スプレッドのレバレッジ弾力性 ζ_spb

    σ_ω の根探索の目的関数。
    """
    zeta_ratio = zeta_bomega_fn(z, sigma, spr) / zeta_zomega_fn(z, sigma, spr)
    nk = nk_fn(z, sigma, spr)
    return -zeta_ratio / (1 - zeta_ratio) * nk / (1 - nk)
