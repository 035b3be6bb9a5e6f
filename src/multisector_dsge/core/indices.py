"""変数インデックス

状態変数・ショック・均衡条件・観測変数の名前を、均衡条件行列や観測方程式行列の
行・列番号（0始まり）に対応付ける。部門別の名前は部門数Nから手続き的に生成する。

    endogenous_states:           12 + 5N
    exogenous_shocks:             3 + 2N
    expected_shocks:              3 + N
    equilibrium_conditions:       9 + 4N
    endogenous_states_augmented:  0（番号は状態変数の後から続く）
    observables:                  2 + 2N
"""

from dataclasses import dataclass
from enum import Enum

from multisector_dsge.core.exceptions import InvalidDimensionError, UnknownKeyError

SCALAR_STATES: tuple[str, ...] = (
    "c_t",
    "pi_t",
    "i_t",
    "h_t",
    "wp_t",
    "z_t",
    "gamma_t",
    "a_t",
    "mu_t",
    "Ec_t",
    "Epi_t",
    "Egamma_t",
)
SCALAR_EXOGENOUS_SHOCKS: tuple[str, ...] = ("gamma_sh", "a_sh", "mu_sh")
SCALAR_EXPECTED_SHOCKS: tuple[str, ...] = ("eta_c", "eta_pi", "eta_gamma")
AGGREGATE_EQUILIBRIUM_CONDITIONS: tuple[str, ...] = (
    "eq_euler",
    "eq_lab",
    "eq_aggsup",
    "eq_costmin",
    "eq_Pi",
    "eq_taylor",
)
PROCESS_EQUILIBRIUM_CONDITIONS: tuple[str, ...] = ("eq_gamma", "eq_a", "eq_mu")
SCALAR_OBSERVABLES: tuple[str, ...] = ("obs_int", "obs_hours")


class IndexCategory(Enum):
    """インデックスの種類"""

    ENDOGENOUS_STATES = "endogenous_states"
    EXOGENOUS_SHOCKS = "exogenous_shocks"
    EXPECTED_SHOCKS = "expected_shocks"
    EQUILIBRIUM_CONDITIONS = "equilibrium_conditions"
    ENDOGENOUS_STATES_AUGMENTED = "endogenous_states_augmented"
    OBSERVABLES = "observables"


def _sector_names(prefix: str, suffix: str, n_sectors: int) -> list[str]:
    return [f"{prefix}{n}{suffix}" for n in range(1, n_sectors + 1)]


def _enumerate(names: list[str], offset: int = 0) -> dict[str, int]:
    return {name: i + offset for i, name in enumerate(names)}


@dataclass(frozen=True)
class ModelIndices:
    """6種類の名前 → 位置の対応"""

    n_sectors: int
    endogenous_states: dict[str, int]
    exogenous_shocks: dict[str, int]
    expected_shocks: dict[str, int]
    equilibrium_conditions: dict[str, int]
    endogenous_states_augmented: dict[str, int]
    observables: dict[str, int]

    def category(self, category: IndexCategory | str) -> dict[str, int]:
        """種類に対応する辞書を返す"""
        return getattr(self, IndexCategory(category).value)

    def index(self, category: IndexCategory | str, name: str) -> int:
        """名前の位置を返す

        Raises:
            UnknownKeyError: 名前が存在しない場合
        """
        mapping = self.category(category)
        try:
            return mapping[name]
        except KeyError:
            raise UnknownKeyError(
                f"{IndexCategory(category).value} に {name} は存在しません"
            ) from None

    def sizes(self) -> dict[str, int]:
        """種類ごとの要素数"""
        return {cat.value: len(self.category(cat)) for cat in IndexCategory}

    @property
    def n_states(self) -> int:
        return len(self.endogenous_states)

    @property
    def n_states_augmented(self) -> int:
        return self.n_states + len(self.endogenous_states_augmented)


def build_indices(n_sectors: int) -> ModelIndices:
    """部門数Nからインデックスを構築する

    同じNに対しては常に同一の辞書を返す。

    Args:
        n_sectors: 部門数N（1以上の整数）

    Raises:
        InvalidDimensionError: Nが1未満または整数でない場合
    """
    if isinstance(n_sectors, bool) or not isinstance(n_sectors, int) or n_sectors < 1:
        raise InvalidDimensionError(f"部門数は1以上の整数である必要があります: {n_sectors!r}")
    n = n_sectors

    endogenous_states = [
        *SCALAR_STATES,
        *_sector_names("ck", "_t", n),
        *_sector_names("pik", "_t", n),
        *_sector_names("Epik", "_t", n),
        *_sector_names("ak", "_t", n),
        *_sector_names("dk", "_t", n),
    ]

    exogenous_shocks = [
        *SCALAR_EXOGENOUS_SHOCKS,
        *_sector_names("ak", "_sh", n),
        *_sector_names("dk", "_sh", n),
    ]

    expected_shocks = [
        *SCALAR_EXPECTED_SHOCKS,
        *_sector_names("eta_pik", "", n),
    ]

    equilibrium_conditions = [
        *AGGREGATE_EQUILIBRIUM_CONDITIONS,
        *_sector_names("eq_pck", "", n),
        *_sector_names("eq_demk", "", n),
        *PROCESS_EQUILIBRIUM_CONDITIONS,
        *_sector_names("eq_ak", "", n),
        *_sector_names("eq_dk", "", n),
    ]

    # ラグ付き状態変数・観測誤差（このモデルでは追加なし）
    endogenous_states_augmented: list[str] = []

    observables = [
        *SCALAR_OBSERVABLES,
        *_sector_names("obs_pik", "", n),
        *_sector_names("obs_ck", "", n),
    ]

    return ModelIndices(
        n_sectors=n,
        endogenous_states=_enumerate(endogenous_states),
        exogenous_shocks=_enumerate(exogenous_shocks),
        expected_shocks=_enumerate(expected_shocks),
        equilibrium_conditions=_enumerate(equilibrium_conditions),
        endogenous_states_augmented=_enumerate(
            endogenous_states_augmented, offset=len(endogenous_states)
        ),
        observables=_enumerate(observables),
    )
