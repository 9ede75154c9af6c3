"""Brio CLI entrypoint.

Command-line interface for extracting annotated code snippets.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import replace
from pathlib import Path

import click

from brio.core.errors import BrioCliError, config_exists_error
from brio.core.extract_usecase import ExtractRequest, ExtractUseCase
from brio.core.languages import build_registry
from brio.core.presentation import SnippetPresenter
from brio.domain.config import BrioConfig
from brio.domain.exceptions import BrioDomainError
from brio.ports.config import ConfigProvider
from brio.version import __version__

logger = logging.getLogger(__name__)


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    BrioCliError exceptions propagate to use their built-in formatting;
    domain errors and unexpected exceptions are converted to BrioCliError,
    with a traceback in verbose mode.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except BrioCliError:
                raise
            except BrioDomainError as e:
                raise BrioCliError(e.message, hint=e.hint) from e
            except RuntimeError as e:
                raise BrioCliError(
                    str(e),
                    hint="Run with --verbose for more details",
                ) from e
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise BrioCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


class _ClickEchoHandler(logging.Handler):
    """Logging handler writing records to stderr through click.

    The stream is resolved at emit time, so output follows click's current
    stderr (including CliRunner's captured streams).
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route brio log records to stderr at a level chosen by the global flags."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    package_logger = logging.getLogger("brio")
    for handler in list(package_logger.handlers):
        if isinstance(handler, _ClickEchoHandler):
            package_logger.removeHandler(handler)

    handler = _ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def _config_provider() -> ConfigProvider:
    """Create the configuration provider used by all commands."""
    from brio.adapters.config.toml_config_provider import TomlConfigProvider

    return TomlConfigProvider()


def _load_config(root: Path) -> BrioConfig:
    """Load the effective configuration for a scan root."""
    return _config_provider().load(root)


@click.group()
@click.version_option(version=__version__, prog_name="brio")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging).",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress warnings about skipped files.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """Brio - extract annotated code snippets.

    Scans source files for tag comments such as:

    \b
    # >: {"foundation": ["messages"]}
    ... code ...
    # <: {"foundation": ["messages"]}

    and prints the snippets whose categories match a filter.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    _configure_logging(verbose, quiet)


@cli.command()
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory to scan.",
)
@click.option(
    "--files",
    "-f",
    "pattern",
    type=str,
    default=None,
    help="File name pattern to match (e.g., '*.py'). Default: all supported files.",
)
@click.option(
    "--categories",
    "-c",
    type=str,
    default=None,
    help="Categories to extract, e.g. 'messages:foundation,tests'.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["markdown", "plain", "json"]),
    default=None,
    help="Output format (default from config: markdown).",
)
@click.option(
    "--clipboard",
    is_flag=True,
    help="Clipboard-friendly output (plain text, no Markdown).",
)
@click.option(
    "--highlight/--no-highlight",
    default=None,
    help="Syntax-highlight snippet bodies for the terminal.",
)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Number of files scanned concurrently.",
)
@click.pass_context
@handle_cli_errors("extract")
def extract(
    ctx: click.Context,
    directory: Path,
    pattern: str | None,
    categories: str | None,
    output_format: str | None,
    clipboard: bool,
    highlight: bool | None,
    workers: int | None,
) -> None:
    """Extract code snippets by category.

    Categories are comma-separated. 'domain:category' restricts a category
    to a domain, and the domain carries over to following bare categories:
    'messages:foundation,tests' selects foundation and tests snippets of
    the messages domain. Without categories every snippet is printed.
    """
    config = _load_config(directory)

    scan = config.scan
    scan = replace(
        scan,
        pattern=pattern if pattern is not None else scan.pattern,
        categories=categories if categories is not None else scan.categories,
        workers=workers if workers is not None else scan.workers,
    )

    display = config.display
    if clipboard:
        display = replace(display, format="plain", syntax_highlighting=False)
    elif output_format is not None:
        display = replace(display, format=output_format)
    if highlight is not None and not clipboard:
        display = replace(display, syntax_highlighting=highlight)

    registry = build_registry(config)
    use_case = ExtractUseCase(registry, workers=scan.workers)
    response = use_case.execute(
        ExtractRequest(root=directory, pattern=scan.pattern, categories=scan.categories)
    )

    if not response.success:
        raise BrioCliError(response.error or "Extraction failed", hint=response.hint)

    logger.debug(
        "Scanned %d file(s), skipped %d",
        response.files_scanned,
        response.files_skipped,
    )
    SnippetPresenter(display).present(response.snippets)

    if clipboard and not ctx.obj.get("quiet", False):
        click.echo(
            f"\n{len(response.snippets)} snippet(s) ready to copy.", err=True
        )


@cli.command()
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory whose .brio.toml languages are included.",
)
@click.pass_context
@handle_cli_errors("languages")
def languages(ctx: click.Context, directory: Path) -> None:
    """List supported languages and their comment syntax."""
    registry = build_registry(_load_config(directory))

    for descriptor in sorted(registry.descriptors(), key=lambda d: d.name.lower()):
        style = descriptor.comment_style
        block = (
            f"{style.block_start} ... {style.block_end}"
            if style.has_block_comments
            else "-"
        )
        extensions = ", ".join(registry.extensions_of(descriptor))
        click.echo(f"{descriptor.name:<12} {extensions}")
        click.echo(f"  single: {style.single}   block: {block}")


@cli.group()
def config() -> None:
    """Manage brio configuration files.

    \b
    - Local: <dir>/.brio.toml (project settings)
    - Global: ~/.config/brio/config.toml (user defaults)

    Local settings override global settings. Missing values use built-in
    defaults. Command-line options override both.
    """
    pass


@config.command("init")
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory to write .brio.toml into.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_context
@handle_cli_errors("config init")
def config_init(ctx: click.Context, directory: Path, force: bool) -> None:
    """Write a default .brio.toml."""
    from brio.shared.config_io import get_local_config_path, save_config

    path = get_local_config_path(directory)
    if path.exists() and not force:
        raise config_exists_error(str(path))

    save_config(BrioConfig.default(), path)
    click.echo(f"Wrote {path}")


@config.command("show")
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory whose .brio.toml is merged in.",
)
@click.pass_context
@handle_cli_errors("config show")
def config_show(ctx: click.Context, directory: Path) -> None:
    """Show the effective configuration (merged global + local) as TOML."""
    from brio.shared.config_io import config_to_toml

    click.echo(config_to_toml(_load_config(directory)), nl=False)


@config.command("path")
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory holding the local config.",
)
def config_path(directory: Path) -> None:
    """Show config file locations and whether they exist."""
    from brio.shared.config_io import get_global_config_path, get_local_config_path

    for label, path in (
        ("Global config: ", get_global_config_path()),
        ("Local config:  ", get_local_config_path(directory)),
    ):
        exists = path.exists()
        status = click.style(
            "exists" if exists else "not created", fg="green" if exists else "yellow"
        )
        click.echo(f"{label}{path}")
        click.echo(f"  Status: {status}")


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
