"""CLIメインエントリーポイント"""

from typing import Annotated

import typer
from rich.console import Console

from multisector_dsge import __version__
from multisector_dsge.cli.commands import (
    configure_logging,
    indices_command,
    parameters_command,
    steady_state_command,
)

app = typer.Typer(
    name="msdsge",
    help="多部門粘着価格DSGEモデル（BGG金融摩擦付き）",
    no_args_is_help=True,
)
console = Console()

SectorsOption = Annotated[
    int,
    typer.Option("--sectors", "-n", help="部門数N"),
]
SubspecOption = Annotated[
    str,
    typer.Option("--subspec", "-s", help="サブスペック（ss2, ss3, ss4）"),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="デバッグログを表示"),
    ] = False,
) -> None:
    configure_logging(verbose)


@app.command("steady-state")
def steady_state(n_sectors: SectorsOption = 1, subspec: SubspecOption = "ss2") -> None:
    """定常状態を表示

    例:
        msdsge steady-state --sectors 3
    """
    steady_state_command(n_sectors, subspec)


@app.command("parameters")
def parameters(
    n_sectors: SectorsOption = 1,
    subspec: SubspecOption = "ss2",
    free_only: Annotated[
        bool,
        typer.Option("--free", help="推定対象パラメータのみ表示"),
    ] = False,
) -> None:
    """モデルパラメータを表示"""
    parameters_command(n_sectors, subspec, free_only)


@app.command("indices")
def indices(
    n_sectors: SectorsOption = 1,
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="表示するインデックスの種類"),
    ] = None,
) -> None:
    """変数インデックスを表示

    例:
        msdsge indices --sectors 3 --category observables
    """
    indices_command(n_sectors, category)


@app.command("version")
def version() -> None:
    """バージョン情報を表示"""
    console.print(f"msdsge version {__version__}")


if __name__ == "__main__":
    app()
