from __future__ import annotations

import json

import typer

from idstree.core.errors import IdsError, IdsExpansionError, IdsLoadError, IdsLookupError
from idstree.core.expand.expand_tree import create_tree
from idstree.core.io.config import ConfigError, IdsConfig, resolve_config
from idstree.core.io.load_table import load_table
from idstree.core.render.render_tree import format_ids_tree, node_to_dict, to_string_simp
from idstree.core.table import VariantTable
from idstree.log import configure_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)

_VARIANT_HELP = "Preferred glyph variant tag (repeatable, first wins)"
_IDS_FILE_HELP = "IDS source file (repeatable, replaces the configured list)"
_CONFIG_HELP = "Optional YAML config file (ids_files, variants)"


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", help="Log lookups and loading at DEBUG level"),
) -> None:
    """IDS decomposition trees."""
    configure_logging(verbose)


@app.command("tree")
def tree(
    char: str = typer.Argument(..., help="Character to decompose"),
    variant: list[str] | None = typer.Option(None, "--variant", "-v", help=_VARIANT_HELP),
    ids_file: list[str] | None = typer.Option(None, "--ids-file", help=_IDS_FILE_HELP),
    config: str | None = typer.Option(None, "--config", help=_CONFIG_HELP),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Print the fully expanded composition tree of a character."""
    if format not in ("text", "json"):
        _print_errors(
            [
                IdsError(
                    code="E_TREE_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: text, json)",
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)

    _check_char(char)
    cfg, table = _load(config, ids_file, variant)

    try:
        t = create_tree(table, char, cfg.variants)
    except IdsExpansionError as e:
        _print_errors([e])
        raise typer.Exit(code=2)

    if format == "text":
        typer.echo(format_ids_tree(t), nl=False)
        return

    payload = {
        "tool": "idstree",
        "command": "tree",
        "char": char,
        "variants": cfg.variants,
        "tree": node_to_dict(t.root),
    }
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))


@app.command("simp")
def simp(
    char: str = typer.Argument(..., help="Character to decompose"),
    level: int = typer.Option(2, "--level", min=1, help="Depth at which characters collapse"),
    variant: list[str] | None = typer.Option(None, "--variant", "-v", help=_VARIANT_HELP),
    ids_file: list[str] | None = typer.Option(None, "--ids-file", help=_IDS_FILE_HELP),
    config: str | None = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Print the simplified (depth-limited) IDS string of a character."""
    _check_char(char)
    cfg, table = _load(config, ids_file, variant)

    try:
        t = create_tree(table, char, cfg.variants)
    except IdsExpansionError as e:
        _print_errors([e])
        raise typer.Exit(code=2)

    typer.echo(to_string_simp(t.root, level))


@app.command("variants")
def variants(
    char: str = typer.Argument(..., help="Character to look up"),
    ids_file: list[str] | None = typer.Option(None, "--ids-file", help=_IDS_FILE_HELP),
    config: str | None = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """List the variant tags and raw descriptions recorded for a character."""
    _check_char(char)
    _, table = _load(config, ids_file, None)

    available = table.variants(char)
    if available is None:
        _print_errors(
            [IdsLookupError(code="E_LOOKUP_NOT_FOUND", message=f"no IDS entry for {char!r}", subject=char)]
        )
        raise typer.Exit(code=2)

    typer.echo(f"Variants of '{char}':")
    for tag, raw in available.items():
        typer.echo(f"- ({tag})\t{raw}")


@app.command("check")
def check(
    ids_file: list[str] | None = typer.Option(None, "--ids-file", help=_IDS_FILE_HELP),
    config: str | None = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Expand every recorded (character, variant) and report the ones that fail."""
    _, table = _load(config, ids_file, None)

    total = 0
    errors: list[IdsError] = []
    for ch in table:
        for tag in table.variants(ch) or {}:
            total += 1
            try:
                create_tree(table, ch, [tag])
            except IdsExpansionError as e:
                errors.append(e)

    if errors:
        _print_errors(errors)
        typer.echo(f"FAILED: {len(errors)} of {total} descriptions")
        raise typer.Exit(code=2)
    typer.echo(f"OK: {total} descriptions expanded")


def _check_char(char: str) -> None:
    if len(char) != 1:
        _print_errors(
            [
                IdsError(
                    code="E_ARG_NOT_A_CHAR",
                    message=f"expected a single character, got {char!r}",
                    path="char",
                )
            ]
        )
        raise typer.Exit(code=2)


def _load(
    config: str | None,
    ids_file: list[str] | None,
    variant: list[str] | None,
) -> tuple[IdsConfig, VariantTable]:
    try:
        cfg = resolve_config(config, ids_files=ids_file, variants=variant)
    except FileNotFoundError:
        _print_errors(
            [
                IdsLoadError(
                    code="E_CONFIG_FILE_NOT_FOUND",
                    message=f"config file not found: {config}",
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=1)
    except (ConfigError, OSError, UnicodeDecodeError) as e:
        _print_errors([IdsLoadError(code="E_CONFIG_FILE_INVALID", message=str(e), file=config)])
        raise typer.Exit(code=1)

    try:
        table = load_table(cfg.ids_files)
    except IdsLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)
    return cfg, table


def _print_errors(errors: list[IdsError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="idstree")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
