"""サブスペック（モデルの部分仕様）

ベースライン（ss2）からの差分をパラメータ集合に適用する。
固定パラメータの変更はオーバーライド経路でのみ行い、推定中には使わない。
"""

from collections.abc import Callable

from multisector_dsge.core.exceptions import ValidationError
from multisector_dsge.parameters.parameter_set import ParameterSet
from multisector_dsge.parameters.types import parameter

SubspecFn = Callable[[ParameterSet], None]


def ss2(params: ParameterSet) -> None:
    """ベースライン"""


def ss3(params: ParameterSet) -> None:
    """価格・賃金のインデクセーションなし

    iota_p, iota_w を0に固定し、推定対象から外す。
    """
    for key in ("iota_p", "iota_w"):
        current = params.get(key)
        params.replace_parameter(
            parameter(
                key,
                0.0,
                description=f"{current.description}（0に固定）",
                tex_label=current.tex_label,
            )
        )


def ss4(params: ParameterSet) -> None:
    """TFPの稼働率調整にモデル内生の資本分配率を使う"""
    params.override("Iendoalpha", 1.0)


SUBSPECS: dict[str, SubspecFn] = {
    "ss2": ss2,
    "ss3": ss3,
    "ss4": ss4,
}


def apply_subspec(params: ParameterSet, subspec: str) -> None:
    """サブスペックをパラメータ集合に適用する

    Raises:
        ValidationError: 未知のサブスペックの場合
    """
    try:
        fn = SUBSPECS[subspec]
    except KeyError:
        raise ValidationError(
            f"未知のサブスペックです: {subspec}（利用可能: {', '.join(SUBSPECS)}）"
        ) from None
    fn(params)
