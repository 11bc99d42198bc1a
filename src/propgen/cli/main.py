"""Main CLI entry point for propgen.

Samples registered generators and shows their shrink trees from the
command line.
"""

from typing import Any
import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from propgen import __version__
from propgen.config.base import SamplingConfig
from propgen.config.loader import load_config
from propgen.generators.base import Generator
from propgen.generators.registry import GeneratorRegistry
from propgen.trees.base import RoseTree

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="propgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """propgen - Generate property-based test data with shrink trees."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _load_settings(config_path: str | None, **overrides: Any) -> SamplingConfig:
    """Load a config file, if any, and apply command line overrides."""
    config = load_config(config_path) if config_path else SamplingConfig()
    updates = {key: value for key, value in overrides.items() if value is not None}
    return config.model_copy(update=updates)


def _create_generator(name: str, config: SamplingConfig) -> Generator:
    registry = GeneratorRegistry()
    gen = registry.create(name)
    if gen is None:
        raise click.UsageError(
            f"Unknown generator '{name}'. Available: {', '.join(registry.list_names())}"
        )
    size = config.size_for(name)
    return gen.resize(size) if size is not None else gen


@cli.command()
@click.argument("name")
@click.option("--count", "-n", type=int, help="Number of samples")
@click.option("--max-size", type=int, help="Largest size sampled")
@click.option("--seed", "-s", type=int, help="Random seed for reproducibility")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="YAML config file")
@click.option("--not-empty", is_flag=True, help="Reject empty values")
@click.option("--json", "as_json", is_flag=True, help="Print samples as JSON")
@click.pass_context
def sample(
    ctx: click.Context,
    name: str,
    count: int | None,
    max_size: int | None,
    seed: int | None,
    config_path: str | None,
    not_empty: bool,
    as_json: bool,
) -> None:
    """Print samples from a registered generator.

    NAME is the generator name, see list-generators.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        config = _load_settings(config_path, max_size=max_size, seed=seed)
        gen = _create_generator(name, config)
        if not_empty:
            gen = gen.not_empty(config.max_tries)

        num = count if count is not None else config.count_for(name)
        values = gen.take_samples(num, config.max_size, rng=config.make_random())

        if as_json:
            click.echo(json.dumps(values, default=str))
            return

        table = Table(title=f"Samples from {name}")
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Value")
        for index, value in enumerate(values):
            table.add_row(str(index), escape(repr(value)))
        console.print(table)

    except click.UsageError:
        raise
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.argument("name")
@click.option("--size", type=int, default=10, help="Size to sample at")
@click.option("--seed", "-s", type=int, help="Random seed for reproducibility")
@click.option("--depth", "-d", type=int, default=2, help="Levels of shrinks to show")
@click.option("--breadth", "-b", type=int, default=5, help="Shrinks shown per node")
@click.option("--json", "as_json", is_flag=True, help="Print the tree as JSON")
@click.pass_context
def tree(
    ctx: click.Context,
    name: str,
    size: int,
    seed: int | None,
    depth: int,
    breadth: int,
    as_json: bool,
) -> None:
    """Show the top of one sample's shrink tree.

    NAME is the generator name, see list-generators.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        config = _load_settings(None, seed=seed)
        rose = _create_generator(name, config).call(config.make_random(), size)

        if as_json:
            click.echo(json.dumps(rose.to_dict(depth, breadth), default=str))
            return

        root = Tree(f"[bold]{escape(repr(rose.root))}[/bold]")
        _add_children(root, rose, depth, breadth)
        console.print(root)

    except click.UsageError:
        raise
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.pass_context
def list_generators(ctx: click.Context) -> None:
    """List available generators."""
    registry = GeneratorRegistry()

    table = Table(title="Available Generators")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for name in registry.list_names():
        table.add_row(name, registry.describe(name))

    console.print(table)


def _add_children(branch: Tree, rose: RoseTree[Any], depth: int, breadth: int) -> None:
    """Add up to breadth shrinks per level to a rich tree."""
    if depth <= 0:
        return
    for child in rose.children.take(breadth):
        node = branch.add(escape(repr(child.root)))
        _add_children(node, child, depth - 1, breadth)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
