"""MSDSGEカスタム例外階層

FailFast原則に従い、エラーは即座に報告される。
例外は定常状態ソルバー内部の根探索の非収束（ConvergenceError）のみで、
これはソルバー内で既定値へのフォールバックとして吸収される。
"""


class DSGEError(Exception):
    """MSDSGEの基底例外クラス"""

    pass


class ValidationError(DSGEError):
    """入力バリデーションエラー"""

    pass


class ParameterValidationError(ValidationError):
    """パラメータ操作が拒否されたエラー"""

    pass


class OutOfBoundsError(ParameterValidationError):
    """パラメータ値が有効範囲外のエラー

    失敗した操作はパラメータ値を変更しない。
    """

    pass


class FixedParameterError(ParameterValidationError):
    """固定パラメータをオーバーライド経路以外で変更しようとしたエラー"""

    pass


class DuplicateKeyError(ParameterValidationError):
    """パラメータキーが重複しているエラー"""

    pass


class UnknownKeyError(ParameterValidationError, KeyError):
    """存在しないキーを参照したエラー"""

    def __str__(self) -> str:
        # KeyErrorはメッセージをreprで表示するため上書きする
        return str(self.args[0]) if self.args else ""


class InvalidDimensionError(ValidationError):
    """部門数Nが不正なエラー（N < 1）"""

    pass


class InvalidInputError(ValidationError):
    """実数直線上の値が非有限なエラー"""

    pass


class SolverError(DSGEError):
    """ソルバー関連のエラー"""

    pass


class SteadyStateError(SolverError):
    """定常状態計算のエラー

    根探索後の弾力性計算で発生した場合はロジック上の欠陥を示す。
    """

    pass


class InvalidParameterDrawError(SteadyStateError):
    """パラメータの組から有効な定常状態が得られないエラー

    負の底の非整数乗、ゼロ除算、非有限な中間値などで発生する。
    サンプラーはこのドローを棄却する（事後確率0として扱う）。
    """

    pass


class ConvergenceError(SolverError):
    """収束エラー

    σ_ωの根探索が収束しなかった場合に発生。ソルバー内部でのみ使用する。
    """

    pass
