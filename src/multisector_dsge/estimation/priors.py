"""ベイズ推定の事前分布

FRBNY DSGEモデルと同じパラメータ化で事前分布を定義する。
Beta・Gammaは平均と標準偏差で、RootInverseGammaは自由度νとスケールτで指定する。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
import scipy.stats


class DistributionType(Enum):
    """事前分布の種類"""

    NORMAL = "normal"
    BETA = "beta"
    GAMMA = "gamma"
    ROOT_INV_GAMMA = "root_inv_gamma"


@dataclass(frozen=True)
class ParameterPrior:
    """単一パラメータの事前分布

    Attributes:
        dist_type: 分布の種類
        a: NORMAL/BETA/GAMMAでは平均、ROOT_INV_GAMMAでは自由度ν
        b: NORMAL/BETA/GAMMAでは標準偏差、ROOT_INV_GAMMAではスケールτ
    """

    dist_type: DistributionType
    a: float
    b: float

    def __post_init__(self) -> None:
        if self.b <= 0:
            raise ValueError(f"事前分布の第2パラメータは正である必要があります: {self.b}")
        if self.dist_type == DistributionType.BETA:
            if not 0.0 < self.a < 1.0 or self.b**2 >= self.a * (1 - self.a):
                raise ValueError(f"Beta分布の平均・標準偏差が不正です: ({self.a}, {self.b})")
        if self.dist_type in (DistributionType.GAMMA, DistributionType.ROOT_INV_GAMMA):
            if self.a <= 0:
                raise ValueError(f"第1パラメータは正である必要があります: {self.a}")

    def _get_scipy_dist(self) -> Any:
        """scipy frozen分布オブジェクトを返す

        ROOT_INV_GAMMAの場合はσ²の分布 InvGamma(ν/2, ντ²/2) を返す。
        """
        match self.dist_type:
            case DistributionType.BETA:
                variance = self.b**2
                common = self.a * (1 - self.a) / variance - 1
                alpha = self.a * common
                beta = (1 - self.a) * common
                return scipy.stats.beta(alpha, beta)
            case DistributionType.GAMMA:
                shape = (self.a / self.b) ** 2
                scale = self.b**2 / self.a
                return scipy.stats.gamma(shape, scale=scale)
            case DistributionType.NORMAL:
                return scipy.stats.norm(loc=self.a, scale=self.b)
            case DistributionType.ROOT_INV_GAMMA:
                nu, tau = self.a, self.b
                return scipy.stats.invgamma(nu / 2, scale=nu * tau**2 / 2)

    def log_pdf(self, value: float) -> float:
        """対数確率密度を計算する

        Args:
            value: パラメータの値

        Returns:
            対数確率密度。台の外の場合は -inf
        """
        dist = self._get_scipy_dist()
        if self.dist_type == DistributionType.ROOT_INV_GAMMA:
            if value <= 0:
                return -np.inf
            # σ² の密度に変数変換のヤコビアン 2σ を掛ける
            lp = float(dist.logpdf(value**2)) + float(np.log(2 * value))
        else:
            lp = float(dist.logpdf(value))
        if not np.isfinite(lp):
            return -np.inf
        return lp

    def sample(self, rng: np.random.Generator, size: int = 1) -> np.ndarray:
        """事前分布からサンプルを生成する

        Args:
            rng: NumPy乱数生成器
            size: サンプル数

        Returns:
            サンプル配列
        """
        dist = self._get_scipy_dist()
        samples = np.asarray(dist.rvs(size=size, random_state=rng), dtype=np.float64)
        if self.dist_type == DistributionType.ROOT_INV_GAMMA:
            samples = np.sqrt(samples)
        return samples

    @property
    def mean(self) -> float:
        """事前分布の平均"""
        if self.dist_type == DistributionType.ROOT_INV_GAMMA:
            # σの平均は閉形式が煩雑なので数値積分に任せる
            return float(self._get_scipy_dist().expect(np.sqrt))
        return self.a


def Normal(mean: float, std: float) -> ParameterPrior:  # noqa: N802
    """正規分布"""
    return ParameterPrior(DistributionType.NORMAL, mean, std)


def BetaAlt(mean: float, std: float) -> ParameterPrior:  # noqa: N802
    """平均・標準偏差で指定するBeta分布"""
    return ParameterPrior(DistributionType.BETA, mean, std)


def GammaAlt(mean: float, std: float) -> ParameterPrior:  # noqa: N802
    """平均・標準偏差で指定するGamma分布"""
    return ParameterPrior(DistributionType.GAMMA, mean, std)


def RootInverseGamma(nu: float, tau: float) -> ParameterPrior:  # noqa: N802
    """σ² ~ InvGamma(ν/2, ντ²/2) となるσの分布"""
    return ParameterPrior(DistributionType.ROOT_INV_GAMMA, nu, tau)
