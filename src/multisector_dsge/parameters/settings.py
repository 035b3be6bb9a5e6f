"""モデル設定

経済・数学的な構造を変えずに計算の振る舞いを変える設定値。
テストモードでは test_settings が settings より優先される。
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Setting:
    """単一の設定値"""

    key: str
    value: Any
    description: str = ""


DEFAULT_SETTINGS: tuple[Setting, ...] = (
    Setting("n_anticipated_shocks", 6, "先行政策ショックの数"),
    Setting("n_anticipated_shocks_padding", 20, "先行政策ショックのパディング"),
    Setting("n_anticipated_lags", 24, "ゼロ金利制約の期待を織り込む過去期間数"),
)

DEFAULT_TEST_SETTINGS: tuple[Setting, ...] = (
    Setting("n_anticipated_shocks", 6, "先行政策ショックの数（テスト）"),
)
