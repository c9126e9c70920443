"""DevKitty CLI — validate, inspect and export DKF icon packs."""

import logging
import os
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from devkitty import __version__
from devkitty.errors import DevKittyError
from devkitty.loader import DKFLoader, split_sources

console = Console()
err_console = Console(stderr=True)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _log_level(verbose: bool) -> str:
    """Resolve the logging level; unknown ``DEVKITTY_LOG_LEVEL`` values mean WARNING."""
    if verbose:
        return "DEBUG"
    level = os.environ.get("DEVKITTY_LOG_LEVEL", "WARNING").upper()
    return level if level in LOG_LEVELS else "WARNING"


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """DevKitty — DKF icon-pack tools.

    SOURCE arguments may be local paths or http(s) URLs. Several sources
    are loaded in order; later documents override same-named icons.
    """
    logging.basicConfig(
        level=_log_level(verbose),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _load(sources: tuple[str, ...]) -> DKFLoader:
    """Additively load every source, exiting with status 1 on failure."""
    expanded = [s for value in sources for s in split_sources(value)]
    loader = DKFLoader()
    try:
        loader.load_all(expanded)
    except DevKittyError as e:
        err_console.print(f"  [red]x[/] {e.kind.value}: {escape(e.message)}")
        raise SystemExit(1)
    return loader


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("sources", nargs=-1, required=True)
def check(sources: tuple[str, ...]):
    """Validate DKF documents and list the icons they define."""
    console.print(f"\n[bold blue]DevKitty[/] — Checking: {escape(' '.join(sources))}\n")

    loader = _load(sources)
    reg = loader.registry

    meta = reg.meta
    if meta is not None:
        console.print(
            f"  format={meta.format} version={meta.version} "
            f"type={meta.type} mode={meta.mode} iconCount={meta.icon_count}"
        )

    table = Table(title=f"Icons ({len(reg)} loaded)")
    table.add_column("Name", style="cyan")
    table.add_column("viewBox")
    table.add_column("Paths", justify="right")

    for icon in reg:
        table.add_row(icon.name, icon.view_box, str(len(icon.paths)))

    console.print(table)
    console.print("\n[green]Valid![/]")


# ── Export ───────────────────────────────────────────────────────────


@main.command()
@click.argument("sources", nargs=-1, required=True)
@click.option("--out", "-o", default="./icons", help="Output directory for .svg files")
@click.option("--size", type=int, default=None, help="Width/height attribute in px")
@click.option("--color", default=None, help="Fill color, e.g. currentColor or #333")
def export(sources: tuple[str, ...], out: str, size: int | None, color: str | None):
    """Write one SVG file per icon."""
    from devkitty.svg import icon_to_svg

    loader = _load(sources)
    out_dir = Path(out)
    out_dir.mkdir(parents=True, exist_ok=True)

    for icon in loader.registry:
        target = out_dir / f"{icon.name}.svg"
        target.write_text(icon_to_svg(icon, size=size, color=color), encoding="utf-8")

    console.print(f"[green]Wrote {len(loader.registry)} icons to:[/] {out_dir}")


# ── Show ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("sources", nargs=-1, required=True)
@click.option("--icon", "-i", "name", required=True, help="Icon name")
@click.option("--size", type=int, default=None, help="Width/height attribute in px")
@click.option("--color", default=None, help="Fill color")
def show(sources: tuple[str, ...], name: str, size: int | None, color: str | None):
    """Print one icon's SVG markup."""
    from devkitty.svg import icon_to_svg

    loader = _load(sources)
    icon = loader.registry.get(name)
    if icon is None:
        err_console.print(f"[red]Unknown icon:[/] {escape(name)}")
        raise SystemExit(1)

    click.echo(icon_to_svg(icon, size=size, color=color))


# ── Dump ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("sources", nargs=-1, required=True)
@click.option("--format", "fmt", default="yaml", type=click.Choice(["yaml", "json"]))
def dump(sources: tuple[str, ...], fmt: str):
    """Print the loaded registry (metadata and icons)."""
    loader = _load(sources)
    data = loader.registry.to_dict()

    if fmt == "json":
        import json

        click.echo(json.dumps(data, indent=2))
    else:
        import yaml

        click.echo(yaml.safe_dump(data, sort_keys=False))


if __name__ == "__main__":
    main()
