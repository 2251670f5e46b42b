"""Fact query commands: show, list, explain."""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cli.utils import build_registry
from facts import Computation, ExternalCommand, FactRegistry

console = Console()


def _registry(ctx: click.Context) -> FactRegistry:
    return build_registry(ctx.obj["config"])


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/]")
    sys.exit(1)


def _describe_execution(execution) -> str:
    if isinstance(execution, ExternalCommand):
        return f"{execution.interpreter} -c {execution.command!r}"
    if isinstance(execution, Computation):
        return getattr(execution.func, "__name__", repr(execution.func))
    return "-"


@click.command("show")
@click.argument("names", nargs=-1)
@click.option("-t", "--tag", "tags", multiple=True, help="Only facts carrying this tag (repeatable)")
@click.option("--table", "as_table", is_flag=True, help="Render as a table")
@click.pass_context
def show(ctx: click.Context, names: tuple[str, ...], tags: tuple[str, ...], as_table: bool):
    """Print fact values. With no NAMES, print every resolvable fact.

    Tags narrow either form: named facts lacking a tag are skipped.
    """
    registry = _registry(ctx)

    if names:
        missing = [n for n in names if n not in registry]
        if missing:
            _fail(f"Unknown fact: {', '.join(missing)}")
        selected = [n for n in names if registry.lookup(n).tagged(*tags)]
        if len(names) == 1 and not as_table:
            value = registry.value(selected[0]) if selected else None
            if value is not None:
                console.print(str(value), markup=False, highlight=False, soft_wrap=True)
            return
        values = {n.lower(): registry.value(n) for n in selected}
        values = {n: v for n, v in values.items() if v is not None}
    else:
        values = registry.export(*tags)

    if as_table:
        table = Table(show_header=True)
        table.add_column("Fact", style="cyan")
        table.add_column("Value")
        for name, value in sorted(values.items()):
            table.add_row(name, escape(str(value)))
        console.print(table)
        return

    for name, value in sorted(values.items()):
        console.print(f"{name} => {value}", markup=False, highlight=False, soft_wrap=True)


@click.command("list")
@click.pass_context
def list_facts(ctx: click.Context):
    """List every registered fact name."""
    registry = _registry(ctx)
    for name in sorted(registry.names()):
        console.print(name, markup=False, highlight=False, soft_wrap=True)


@click.command("explain")
@click.argument("name")
@click.pass_context
def explain(ctx: click.Context, name: str):
    """Show how a fact resolves: resolutions in order, their confines and the value."""
    registry = _registry(ctx)
    fact = registry.lookup(name)
    if fact is None:
        _fail(f"Unknown fact: {name}")

    value = fact.value()

    console.print(f"{fact.name}: {fact.count()} resolutions", markup=False, highlight=False)
    table = Table(show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Confines")
    table.add_column("Execution", style="green")
    for i, res in enumerate(fact.resolutions, 1):
        confines = ", ".join(str(c) for c in res.confines) or "-"
        table.add_row(str(i), escape(confines), escape(_describe_execution(res.execution)))
    console.print(table)

    if fact.tags:
        console.print(f"Tags: {', '.join(fact.tags)}", markup=False, highlight=False, soft_wrap=True)
    console.print(f"Suitable: {fact.suitable()}")
    if value is None:
        console.print("[yellow]Value: (none)[/]")
    else:
        console.print(f"Value: {value}", markup=False, highlight=False, soft_wrap=True)
