"""デフォルトパラメータ

多部門粘着価格モデル（BGG金融摩擦付き）の推定対象パラメータと定常状態値の初期定義。
値・値域・変換・事前分布は四半期モデルの推定結果に基づく。

部門数Nに依存するもの:
    alphak{n}   各部門の価格硬直性（固定, n = 1..N）
先行政策ショック数に依存するもの:
    sigma_r_m{i}  先行政策ショックの標準偏差（i = 1..padding, 12以下のみ推定対象）
"""

from multisector_dsge.core.transforms import TransformKind
from multisector_dsge.estimation.priors import BetaAlt, GammaAlt, Normal, RootInverseGamma
from multisector_dsge.parameters.constants import MODEL_DIMENSIONS
from multisector_dsge.parameters.types import (
    EstimableParameter,
    SteadyStateParameter,
    parameter,
)

SQ = TransformKind.SQUARE_ROOT
EXP = TransformKind.EXPONENTIAL
UNT = TransformKind.UNTRANSFORMED

UNIT = (1e-5, 0.999)
UNIT_WIDE = (1e-5, 0.99999)
UNIT_TRANSFORM = (1e-5, 0.99)
POSITIVE = (1e-5, 10.0)
SHOCK_STD = (1e-8, 5.0)
LARGE_SHOCK_STD = (1e-7, 100.0)
# 指数変換の (a, b) = (1e-5, 0)
EXP_ORIGIN = (1e-5, 0.0)


# --- スケーリング関数 ---


def discount_factor(x: float) -> float:
    """年率%の時間選好率 → 四半期割引因子 β"""
    return 1 / (1 + x / 100)


def gross_quarterly_inflation(x: float) -> float:
    """四半期%インフレ率 → グロスインフレ率"""
    return 1 + x / 100


def quarterly_default_probability(x: float) -> float:
    """年率デフォルト確率 → 四半期デフォルト確率"""
    return 1 - (1 - x) ** 0.25


def gross_quarterly_spread(x: float) -> float:
    """年率%スプレッド → 四半期グロススプレッド"""
    return (1 + x / 100) ** 0.25


def percent_to_rate(x: float) -> float:
    return x / 100


def sector_parameters(n_sectors: int) -> list[EstimableParameter]:
    """部門別パラメータ（各部門の価格硬直性）"""
    return [
        parameter(
            f"alphak{n}",
            0.50,
            description=f"alphak{n}: 部門{n}の価格硬直性",
            tex_label=f"\\alpha_{{k{n}}}",
        )
        for n in range(1, n_sectors + 1)
    ]


def core_parameters() -> list[EstimableParameter]:
    """技術・選好・価格/賃金設定・金融政策・金融摩擦のパラメータ"""
    return [
        # --- 技術 ---
        parameter(
            "alpha", 0.1596, UNIT, UNIT, SQ, Normal(0.30, 0.05), fixed=False,
            description="alpha: 中間財生産関数の資本分配率",
            tex_label="\\alpha",
        ),
        parameter(
            "zeta_p", 0.8940, UNIT, UNIT, SQ, BetaAlt(0.5, 0.1), fixed=False,
            description="zeta_p: カルボ型価格硬直性",
            tex_label="\\zeta_p",
        ),
        parameter(
            "iota_p", 0.1865, UNIT, UNIT, SQ, BetaAlt(0.5, 0.15), fixed=False,
            description="iota_p: 価格の過去インフレへのインデクセーション",
            tex_label="\\iota_p",
        ),
        parameter("delta", 0.025, description="delta: 資本減耗率", tex_label="\\delta"),
        parameter(
            "Upsilon", 1.000, (0.0, 10.0), EXP_ORIGIN, EXP, GammaAlt(1.0, 0.5),
            description="Upsilon: 投資財の相対価格の成長率",
            tex_label="\\Upsilon",
        ),
        parameter(
            "Phi", 1.1066, (1.0, 10.0), (1.0, 10.0), EXP, Normal(1.25, 0.12), fixed=False,
            description="Phi: 生産の固定費用",
            tex_label="\\Phi",
        ),
        parameter(
            "S2", 2.7314, (-15.0, 15.0), (-15.0, 15.0), UNT, Normal(4.0, 1.5), fixed=False,
            description="S2: 投資調整費用関数の2階微分",
            tex_label="S''",
        ),
        # --- 選好 ---
        parameter(
            "h", 0.5347, UNIT, UNIT, SQ, BetaAlt(0.7, 0.1), fixed=False,
            description="h: 消費の習慣形成",
            tex_label="h",
        ),
        parameter(
            "ppsi", 0.6862, UNIT, UNIT, SQ, BetaAlt(0.5, 0.15), fixed=False,
            description="ppsi: 稼働率調整費用",
            tex_label="\\psi",
        ),
        parameter(
            "nu_l", 2.5975, POSITIVE, POSITIVE, EXP, Normal(2.0, 0.75), fixed=False,
            description="nu_l: 労働供給弾力性の逆数",
            tex_label="\\nu_l",
        ),
        # --- 賃金設定 ---
        parameter(
            "zeta_w", 0.9291, UNIT, UNIT, SQ, BetaAlt(0.5, 0.1), fixed=False,
            description="zeta_w: カルボ型賃金硬直性",
            tex_label="\\zeta_w",
        ),
        parameter(
            "iota_w", 0.2992, UNIT, UNIT, SQ, BetaAlt(0.5, 0.15), fixed=False,
            description="iota_w: 賃金の過去インフレへのインデクセーション",
            tex_label="\\iota_w",
        ),
        parameter("lambda_w", 1.5000, description="lambda_w: 賃金マークアップ", tex_label="\\lambda_w"),
        parameter(
            "beta", 0.1402, POSITIVE, POSITIVE, EXP, GammaAlt(0.25, 0.1), fixed=False,
            scaling=discount_factor,
            description="beta: 割引因子（年率%の時間選好率で推定）",
            tex_label="100(\\beta^{-1} - 1)",
        ),
        # --- 金融政策 ---
        parameter(
            "psi1", 1.3679, POSITIVE, POSITIVE, EXP, Normal(1.5, 0.25), fixed=False,
            description="psi1: テイラールールのインフレ反応",
            tex_label="\\psi_1",
        ),
        parameter(
            "psi2", 0.0388, (-0.5, 0.5), (-0.5, 0.5), UNT, Normal(0.12, 0.05), fixed=False,
            description="psi2: テイラールールのGDPギャップ反応",
            tex_label="\\psi_2",
        ),
        parameter(
            "psi3", 0.2464, (-0.5, 0.5), (-0.5, 0.5), UNT, Normal(0.12, 0.05), fixed=False,
            description="psi3: テイラールールのGDPギャップ変化反応",
            tex_label="\\psi_3",
        ),
        parameter(
            "pi_star", 0.5000, POSITIVE, POSITIVE, EXP, GammaAlt(0.75, 0.4),
            scaling=gross_quarterly_inflation,
            description="pi_star: 定常インフレ率（四半期%）",
            tex_label="\\pi_*",
        ),
        parameter(
            "sigma_c", 0.8719, POSITIVE, POSITIVE, EXP, Normal(1.5, 0.37), fixed=False,
            description="sigma_c: 異時点間代替弾力性の逆数",
            tex_label="\\sigma_c",
        ),
        parameter(
            "rho", 0.7126, UNIT, UNIT, SQ, BetaAlt(0.75, 0.10), fixed=False,
            description="rho: テイラールールの金利平滑化",
            tex_label="\\rho_R",
        ),
        parameter("epsilon_p", 10.000, description="epsilon_p: 財の代替弾力性", tex_label="\\varepsilon_p"),
        parameter(
            "epsilon_w", 10.000, description="epsilon_w: 労働の代替弾力性", tex_label="\\varepsilon_w"
        ),
        # --- 金融摩擦 ---
        parameter(
            "F_omega", 0.0300, UNIT_WIDE, UNIT_TRANSFORM, SQ, BetaAlt(0.03, 0.01),
            scaling=quarterly_default_probability,
            description="F_omega: 企業家の年率デフォルト確率",
            tex_label="F(\\bar{\\omega})",
        ),
        parameter(
            "spr", 1.7444, (0.0, 100.0), EXP_ORIGIN, EXP, GammaAlt(2.0, 0.1), fixed=False,
            scaling=gross_quarterly_spread,
            description="spr: 定常状態のスプレッド（年率%）",
            tex_label="SP_*",
        ),
        parameter(
            "zeta_spb", 0.0559, UNIT_WIDE, UNIT_TRANSFORM, SQ, BetaAlt(0.05, 0.005), fixed=False,
            description="zeta_spb: スプレッドのレバレッジ弾力性",
            tex_label="\\zeta_{sp,b}",
        ),
        parameter(
            "gamma_star", 0.9900, UNIT_WIDE, UNIT_TRANSFORM, SQ, BetaAlt(0.99, 0.002),
            description="gamma_star: 企業家の生存確率",
            tex_label="\\gamma_*",
        ),
        # --- 成長・観測 ---
        parameter(
            "gamma", 0.3673, (-5.0, 5.0), (-5.0, 5.0), UNT, Normal(0.4, 0.1), fixed=False,
            scaling=percent_to_rate,
            description="gamma: 定常状態の四半期成長率（%）",
            tex_label="100\\gamma",
        ),
        parameter(
            "Lmean", -45.9364, (-1000.0, 1000.0), (-1e3, 1e3), UNT, Normal(-45.0, 5.0),
            fixed=False,
            description="Lmean: 労働時間の平均",
            tex_label="\\bar{L}",
        ),
        parameter("g_star", 0.1800, description="g_star: 定常状態の政府支出/GDP比", tex_label="g_*"),
    ]


def shock_parameters(n_padding: int) -> list[EstimableParameter]:
    """外生ショック過程の持続性・標準偏差・相関"""
    params: list[EstimableParameter] = []

    persistence = [
        ("rho_g", 0.9863, UNIT, UNIT, "政府支出ショック"),
        ("rho_b", 0.9410, UNIT, UNIT, "リスクプレミアムショック"),
        ("rho_mu", 0.8735, UNIT, UNIT, "限界投資効率ショック"),
        ("rho_z", 0.9446, UNIT, UNIT, "技術ショック"),
        ("rho_lambda_f", 0.8827, UNIT, UNIT, "価格マークアップショック"),
        ("rho_lambda_w", 0.3884, UNIT, UNIT, "賃金マークアップショック"),
        ("rho_rm", 0.2135, UNIT, UNIT, "金融政策ショック"),
        ("rho_sigma_w", 0.9898, UNIT_WIDE, UNIT_TRANSFORM, "企業家リスクショック"),
    ]
    for key, value, bounds, tparams, label in persistence:
        prior = (
            BetaAlt(0.75, 0.15) if key == "rho_sigma_w" else BetaAlt(0.5, 0.2)
        )
        params.append(
            parameter(
                key, value, bounds, tparams, SQ, prior, fixed=False,
                description=f"{key}: {label}の持続性",
            )
        )

    params += [
        parameter(
            "rho_mu_e", 0.7500, UNIT_WIDE, UNIT_TRANSFORM, SQ, BetaAlt(0.75, 0.15),
            description="rho_mu_e: 破産費用ショックの持続性",
        ),
        parameter(
            "rho_gamma", 0.7500, UNIT_WIDE, UNIT_TRANSFORM, SQ, BetaAlt(0.75, 0.15),
            description="rho_gamma: 企業家生存確率ショックの持続性",
        ),
        parameter(
            "rho_pi_star", 0.9900, UNIT, UNIT, SQ, BetaAlt(0.5, 0.2),
            description="rho_pi_star: 目標インフレ率ショックの持続性",
        ),
    ]
    for key, value in [
        ("rho_lr", 0.6936),
        ("rho_z_p", 0.8910),
        ("rho_tfp", 0.1953),
        ("rho_gdpdef", 0.5379),
        ("rho_corepce", 0.2320),
    ]:
        params.append(
            parameter(
                key, value, UNIT, UNIT, SQ, BetaAlt(0.5, 0.2), fixed=False,
                description=f"{key}: 持続性",
            )
        )

    for key, value in [
        ("sigma_g", 2.5230),
        ("sigma_b", 0.0292),
        ("sigma_mu", 0.4559),
        ("sigma_z", 0.6742),
        ("sigma_lambda_f", 0.1314),
        ("sigma_lambda_w", 0.3864),
        ("sigma_r_m", 0.2380),
    ]:
        params.append(
            parameter(
                key, value, SHOCK_STD, SHOCK_STD, EXP, RootInverseGamma(2.0, 0.10), fixed=False,
                description=f"{key}: ショックの標準偏差",
            )
        )

    params += [
        parameter(
            "sigma_sigma_omega", 0.0428, LARGE_SHOCK_STD, EXP_ORIGIN, EXP,
            RootInverseGamma(4.0, 0.05), fixed=False,
            description="sigma_sigma_omega: 企業家リスクショックの標準偏差",
        ),
        parameter(
            "sigma_mu_e", 0.0000, LARGE_SHOCK_STD, EXP_ORIGIN, EXP, RootInverseGamma(4.0, 0.05),
            description="sigma_mu_e: 破産費用ショックの標準偏差",
        ),
        parameter(
            "sigma_gamma", 0.0000, LARGE_SHOCK_STD, EXP_ORIGIN, EXP, RootInverseGamma(4.0, 0.01),
            description="sigma_gamma: 企業家生存確率ショックの標準偏差",
        ),
        parameter(
            "sigma_pi_star", 0.0269, SHOCK_STD, SHOCK_STD, EXP, RootInverseGamma(6.0, 0.03),
            fixed=False,
            description="sigma_pi_star: 目標インフレ率ショックの標準偏差",
        ),
        parameter(
            "sigma_lr", 0.1766, (1e-8, 10.0), SHOCK_STD, EXP, RootInverseGamma(2.0, 0.75),
            fixed=False,
            description="sigma_lr: 長期インフレ期待の観測誤差",
        ),
    ]
    for key, value in [
        ("sigma_z_p", 0.1662),
        ("sigma_tfp", 0.9391),
        ("sigma_gdpdef", 0.1575),
        ("sigma_corepce", 0.0999),
    ]:
        params.append(
            parameter(
                key, value, SHOCK_STD, SHOCK_STD, EXP, RootInverseGamma(2.0, 0.10), fixed=False,
                description=f"{key}: ショックの標準偏差",
            )
        )

    params += anticipated_shock_parameters(n_padding)

    params += [
        parameter(
            "eta_gz", 0.8400, UNIT, UNIT, SQ, BetaAlt(0.50, 0.20), fixed=False,
            description="eta_gz: 政府支出ショックと技術ショックの相関",
            tex_label="\\eta_{gz}",
        ),
        parameter(
            "eta_lambda_f", 0.7892, UNIT, UNIT, SQ, BetaAlt(0.50, 0.20), fixed=False,
            description="eta_lambda_f: 価格マークアップショックのMA係数",
            tex_label="\\eta_{\\lambda_f}",
        ),
        parameter(
            "eta_lambda_w", 0.4226, UNIT, UNIT, SQ, BetaAlt(0.50, 0.20), fixed=False,
            description="eta_lambda_w: 賃金マークアップショックのMA係数",
            tex_label="\\eta_{\\lambda_w}",
        ),
        parameter(
            "Iendoalpha", 0.0000, (0.0, 1.0), (0.0, 0.0), UNT, BetaAlt(0.50, 0.20),
            description="Iendoalpha: 稼働率調整でモデル内生の資本分配率を使うかどうか",
            tex_label="I\\{\\alpha^{model}\\}",
        ),
        parameter(
            "Gamma_gdpdef", 1.0354, (-10.0, 10.0), (-10.0, -10.0), UNT, Normal(1.00, 2.0),
            fixed=False,
            description="Gamma_gdpdef: GDPデフレーターの係数",
            tex_label="\\Gamma_{gdpdef}",
        ),
        parameter(
            "delta_gdpdef", 0.0181, (-9.1, 9.1), (-10.0, -10.0), UNT, Normal(0.00, 2.0),
            fixed=False,
            description="delta_gdpdef: GDPデフレーターの定数項",
            tex_label="\\delta_{gdpdef}",
        ),
    ]
    return params


def anticipated_shock_parameters(n_padding: int) -> list[EstimableParameter]:
    """先行政策ショックの標準偏差 sigma_r_m1..sigma_r_m{n_padding}"""
    params: list[EstimableParameter] = []
    for i in range(1, n_padding + 1):
        estimated = i < MODEL_DIMENSIONS.anticipated_shock_estimated_below
        params.append(
            parameter(
                f"sigma_r_m{i}",
                0.2 if estimated else 0.0,
                LARGE_SHOCK_STD,
                EXP_ORIGIN,
                EXP,
                RootInverseGamma(4.0, 0.2),
                fixed=not estimated,
                description=f"sigma_r_m{i}: {i}期先行政策ショックの標準偏差",
                tex_label=f"\\sigma_{{ant{i}}}",
            )
        )
    return params


# 定常状態値: (キー, 説明)
STEADY_STATE_DEFINITIONS: tuple[tuple[str, str], ...] = (
    ("z_star", "定常状態の技術成長率"),
    ("rstar", "定常状態の実質粗利子率"),
    ("Rstarn", "定常状態の名目利子率（年率%）"),
    ("r_k_star", "定常状態の資本レンタル率"),
    ("wstar", "定常状態の実質賃金"),
    ("Lstar", "定常状態の労働時間"),
    ("kstar", "家計が企業に貸し出す実効資本"),
    ("kbarstar", "家計が保有する資本ストック"),
    ("istar", "トレンド除去後の定常状態投資"),
    ("ystar", "定常状態の産出"),
    ("cstar", "定常状態の消費"),
    ("wl_c", "賃金所得/消費比率"),
    ("nstar", "企業家の定常状態純資産"),
    ("vstar", "企業家の定常状態持分"),
    ("zeta_spsigma_omega", "スプレッドの企業家リスク弾力性"),
    ("zeta_spmu_e", "スプレッドの破産費用弾力性"),
    ("zeta_nRk", "純資産の資本収益率弾力性"),
    ("zeta_nR", "純資産の無リスク金利弾力性"),
    ("zeta_nqk", "純資産の資本価値弾力性"),
    ("zeta_nn", "純資産の自己弾力性"),
    ("zeta_nmu_e", "純資産の破産費用弾力性"),
    ("zeta_nsigma_omega", "純資産の企業家リスク弾力性"),
    ("z_omega_star", "デフォルト閾値の標準正規分位点"),
    ("sigma_omega_star", "企業家の個別ショックの標準偏差"),
    ("omega_bar_star", "デフォルト閾値"),
    ("mu_e_star", "破産費用比率"),
)


def steady_state_parameters() -> list[SteadyStateParameter]:
    """定常状態値のプレースホルダ（初期値NaN）"""
    return [
        SteadyStateParameter(key, description=description)
        for key, description in STEADY_STATE_DEFINITIONS
    ]


def default_parameters(n_sectors: int, n_padding: int) -> list[EstimableParameter]:
    """宣言順の全推定対象パラメータ"""
    return [
        *sector_parameters(n_sectors),
        *core_parameters(),
        *shock_parameters(n_padding),
    ]
