"""CLIコマンド実装"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Protocol, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from multisector_dsge.core.exceptions import DSGEError, SolverError, ValidationError
from multisector_dsge.core.indices import IndexCategory
from multisector_dsge.core.model import CarvalhoModel
from multisector_dsge.core.steady_state import FINANCIAL_FRICTION_KEYS, MACRO_KEYS

console = Console()

F = TypeVar("F", bound=Callable[..., None])


def handle_dsge_error(func: F) -> F:
    """CLI用エラーハンドリングデコレータ

    モデルの例外を捕捉し、ユーザーフレンドリーなエラーメッセージを表示する。
    """

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except ValidationError as e:
            console.print(f"[red]入力エラー: {e}[/red]")
            raise typer.Exit(1) from e
        except SolverError as e:
            console.print(f"[red]計算エラー: {e}[/red]")
            raise typer.Exit(2) from e
        except DSGEError as e:
            console.print(f"[red]エラー: {e}[/red]")
            raise typer.Exit(3) from e

    return wrapper  # type: ignore[return-value]


class ModelFactory(Protocol):
    """モデル生成のプロトコル（DI用）"""

    def create_model(self, n_sectors: int, subspec: str) -> CarvalhoModel: ...


class DefaultModelFactory:
    """デフォルトのモデルファクトリ"""

    def create_model(self, n_sectors: int, subspec: str) -> CarvalhoModel:
        return CarvalhoModel(n_sectors, subspec)


class ModelFactoryManager:
    """モデルファクトリ管理（DI用）"""

    _instance: ModelFactory | None = None

    @classmethod
    def get(cls) -> ModelFactory:
        if cls._instance is None:
            cls._instance = DefaultModelFactory()
        return cls._instance

    @classmethod
    def set(cls, factory: ModelFactory) -> None:
        """テスト用にファクトリを設定"""
        cls._instance = factory

    @classmethod
    def reset(cls) -> None:
        """テスト用にリセット"""
        cls._instance = None


def configure_logging(verbose: bool) -> None:
    """--verbose 指定時のみログをコンソールに出力する"""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@handle_dsge_error
def steady_state_command(n_sectors: int, subspec: str) -> None:
    """定常状態を表示"""
    model = ModelFactoryManager.get().create_model(n_sectors, subspec)
    result = model.steady_state_result

    console.print()
    console.print(Panel(f"[bold]定常状態[/bold]\n{model.description}", title="msdsge"))

    table1 = Table(title="均斉成長経路")
    table1.add_column("変数", style="cyan")
    table1.add_column("値", style="green")
    for key in MACRO_KEYS:
        table1.add_row(key, f"{model[key]:.6f}")
    console.print(table1)

    table2 = Table(title="金融摩擦ブロック")
    table2.add_column("変数", style="cyan")
    table2.add_column("値", style="green")
    for key in FINANCIAL_FRICTION_KEYS:
        table2.add_row(key, f"{model[key]:.6f}")
    console.print(table2)

    if result.used_fallback:
        console.print(f"[yellow]注意: {result.message}[/yellow]")


@handle_dsge_error
def parameters_command(n_sectors: int, subspec: str, free_only: bool) -> None:
    """パラメータを表示"""
    model = ModelFactoryManager.get().create_model(n_sectors, subspec)
    params = model.parameters.free_parameters if free_only else model.parameters.parameters

    console.print()
    console.print(Panel(f"[bold]モデルパラメータ[/bold]\n{model.description}", title="msdsge"))

    table = Table(title=f"パラメータ（{len(params)}個）")
    table.add_column("パラメータ", style="cyan")
    table.add_column("値", style="green")
    table.add_column("スケール後", style="green")
    table.add_column("値域", style="magenta")
    table.add_column("固定", style="yellow")
    table.add_column("説明", style="yellow")

    for p in params:
        lower, upper = p.valuebounds
        table.add_row(
            p.key,
            f"{p.value:.4f}",
            f"{p.scaled_value:.6f}",
            f"[{lower:g}, {upper:g}]",
            "✓" if p.fixed else "",
            p.description,
        )

    console.print(table)


@handle_dsge_error
def indices_command(n_sectors: int, category: str | None) -> None:
    """変数インデックスを表示"""
    model = ModelFactoryManager.get().create_model(n_sectors, "ss2")
    indices = model.indices

    console.print()
    if category is None:
        table = Table(title=f"インデックスの要素数（N={n_sectors}）")
        table.add_column("種類", style="cyan")
        table.add_column("要素数", style="green")
        for name, size in indices.sizes().items():
            table.add_row(name, str(size))
        console.print(table)
        return

    try:
        cat = IndexCategory(category)
    except ValueError:
        raise ValidationError(
            f"未知のインデックス種類です: {category}"
            f"（利用可能: {', '.join(c.value for c in IndexCategory)}）"
        ) from None

    table = Table(title=f"{cat.value}（N={n_sectors}）")
    table.add_column("名前", style="cyan")
    table.add_column("位置", style="green")
    for name, pos in indices.category(cat).items():
        table.add_row(name, str(pos))
    console.print(table)
