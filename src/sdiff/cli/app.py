"""CLI entry point for sdiff."""

from __future__ import annotations

import logging
import sys
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from sdiff.core.comparator import compute_diff
from sdiff.core.filtering import FilterConfig, filter_changes
from sdiff.core.models import ArrayStrategy, DiffConfig
from sdiff.errors import SdiffError
from sdiff.formats.detect import FormatHint, detect_format
from sdiff.formats.loader import STDIN_NAME, parse_bytes, parse_file, parse_stdin
from sdiff.output.base import OutputFormat, OutputOptions
from sdiff.output.rich_output import RichRenderer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sdiff.core.value import Value
    from sdiff.git.resolver import GitResolver
    from sdiff.output.base import Renderer

_log = logging.getLogger(__name__)

EXIT_NO_CHANGES = 0
EXIT_CHANGES = 1
EXIT_ERROR = 2

app = typer.Typer(
    name="sdiff",
    help="Semantic diff for structured data (JSON, YAML, TOML).",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from sdiff import __version__

        typer.echo(f"sdiff {__version__}")
        raise typer.Exit()


def _parse_output_format(value: str) -> OutputFormat:
    """Parse output format string to OutputFormat enum."""
    try:
        return OutputFormat(value.lower())
    except ValueError:
        valid = ", ".join(f.value for f in OutputFormat)
        msg = f"Invalid output format '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _parse_array_strategy(value: str) -> ArrayStrategy:
    """Parse array strategy string to ArrayStrategy enum."""
    try:
        return ArrayStrategy(value.lower())
    except ValueError:
        valid = ", ".join(s.value for s in ArrayStrategy)
        msg = f"Invalid array strategy '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _parse_input_format(value: str) -> FormatHint:
    """Parse input format string to FormatHint enum."""
    try:
        return FormatHint(value.lower())
    except ValueError:
        valid = ", ".join(h.value for h in FormatHint)
        msg = f"Invalid input format '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _build_diff_config(
    *,
    compact: bool,
    null_as_missing: bool,
    ignore_whitespace: bool,
    array_strategy: ArrayStrategy,
) -> DiffConfig:
    """Build DiffConfig from CLI flags."""
    return DiffConfig(
        compact=compact,
        null_as_missing=null_as_missing,
        ignore_whitespace=ignore_whitespace,
        array_strategy=array_strategy,
    )


def _build_filter_config(
    *,
    ignore: list[str] | None,
    only: list[str] | None,
) -> FilterConfig:
    """Build FilterConfig from CLI flags."""
    return FilterConfig(
        ignore_patterns=tuple(ignore) if ignore else (),
        only_patterns=tuple(only) if only else (),
    )


def _get_renderer(output_format: OutputFormat, options: OutputOptions) -> Renderer:
    """Get the appropriate renderer for the output format.

    Args:
        output_format: The output format to use.
        options: Display options for the human-readable renderers.

    Returns:
        A renderer instance.
    """
    if output_format == OutputFormat.json:
        from sdiff.output.json_output import JsonRenderer

        return JsonRenderer()
    if output_format == OutputFormat.plain:
        from sdiff.output.plain_output import PlainRenderer

        return PlainRenderer(options=options)
    return RichRenderer(options=options)


def _configure_logging(*, verbose: bool) -> None:
    """Send sdiff's log records to stderr through Rich; DEBUG when verbose."""
    logger = logging.getLogger("sdiff")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
    )
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _run_git_action(*, install: bool, uninstall: bool, status: bool) -> None:
    """Perform one git configuration action and echo its report."""
    from sdiff.git import install as git_install

    if install:
        lines = git_install.install()
    elif uninstall:
        lines = git_install.uninstall()
    else:
        lines = git_install.status()
    for line in lines:
        typer.echo(line)


def _load_input(argument: str, hint: FormatHint, resolver: GitResolver) -> Value:
    """Load one side of the comparison from stdin, git history, or a file."""
    from sdiff.git.resolver import is_git_ref, split_git_ref

    _log.debug("Loading %s", argument)
    if argument == STDIN_NAME:
        return parse_stdin(hint)
    if is_git_ref(argument):
        content, name = resolver.read(argument)
        if hint == FormatHint.auto:
            _, path_in_repo = split_git_ref(argument)
            hint = detect_format(PurePosixPath(path_in_repo))
        return parse_bytes(content, hint, source=name)
    return parse_file(Path(argument), hint)


@app.command(no_args_is_help=True)
def main(
    file1: Annotated[
        str | None,
        typer.Argument(
            help="Old document: a path, '-' for stdin, or git:<ref>:<path>.",
            show_default=False,
        ),
    ] = None,
    file2: Annotated[
        str | None,
        typer.Argument(
            help="New document: a path, '-' for stdin, or git:<ref>:<path>.",
            show_default=False,
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: terminal, plain, or json."),
    ] = "terminal",
    compact: Annotated[
        bool,
        typer.Option("--compact/--no-compact", help="Hide unchanged values."),
    ] = True,
    show_values: Annotated[
        bool,
        typer.Option("--show-values", help="Show full values instead of previews."),
    ] = False,
    max_value_length: Annotated[
        int,
        typer.Option("--max-value-length", min=1, help="Maximum length of value previews."),
    ] = 80,
    null_as_missing: Annotated[
        bool,
        typer.Option("--null-as-missing", help="Treat keys holding null as absent."),
    ] = False,
    ignore_whitespace: Annotated[
        bool,
        typer.Option("--ignore-whitespace", help="Ignore whitespace differences in strings."),
    ] = False,
    array_strategy: Annotated[
        str,
        typer.Option("--array-strategy", "-a", help="Array alignment: positional or lcs."),
    ] = "positional",
    ignore: Annotated[
        list[str] | None,
        typer.Option("--ignore", help="Path pattern(s) to leave out, e.g. metadata.**"),
    ] = None,
    only: Annotated[
        list[str] | None,
        typer.Option("--only", help="Path pattern(s) to keep, e.g. spec.*.image"),
    ] = None,
    input_format: Annotated[
        str,
        typer.Option("--input-format", help="Input format: auto, json, yaml, or toml."),
    ] = "auto",
    stat: Annotated[
        bool,
        typer.Option("--stat", help="Show only summary statistics."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress to stderr."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress the summary line."),
    ] = False,
    git_install: Annotated[
        bool,
        typer.Option("--git-install", help="Register sdiff as a git difftool and diff driver."),
    ] = False,
    git_uninstall: Annotated[
        bool,
        typer.Option("--git-uninstall", help="Remove sdiff from the global git config."),
    ] = False,
    git_status: Annotated[
        bool,
        typer.Option("--git-status", help="Show the sdiff git configuration."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Compare two structured documents by meaning rather than by text.

    Exits with 0 when the documents are equivalent, 1 when they differ and
    2 on errors.
    """
    from sdiff.git.resolver import GitResolver

    _configure_logging(verbose=verbose)

    try:
        if git_install or git_uninstall or git_status:
            _run_git_action(install=git_install, uninstall=git_uninstall, status=git_status)
            return

        if file1 is None or file2 is None:
            msg = "Two documents are required: FILE1 FILE2"
            raise typer.BadParameter(msg)
        if file1 == STDIN_NAME and file2 == STDIN_NAME:
            msg = "Only one document can be read from stdin"
            raise typer.BadParameter(msg)

        fmt = _parse_output_format(output_format)
        hint = _parse_input_format(input_format)
        diff_config = _build_diff_config(
            compact=compact,
            null_as_missing=null_as_missing,
            ignore_whitespace=ignore_whitespace,
            array_strategy=_parse_array_strategy(array_strategy),
        )
        filter_config = _build_filter_config(ignore=ignore, only=only)
        options = OutputOptions(
            show_values=show_values,
            max_value_length=max_value_length,
            quiet=quiet,
        )

        resolver = GitResolver(cwd=Path.cwd())
        old = _load_input(file1, hint, resolver)
        new = _load_input(file2, hint, resolver)

        change_set = filter_changes(compute_diff(old, new, diff_config), filter_config)

        renderer = _get_renderer(fmt, options)
        if stat:
            renderer.render_stats(change_set.stats)
        else:
            renderer.render(change_set)

    except (SdiffError, OSError, typer.BadParameter) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_ERROR) from None

    if not change_set.is_empty():
        raise typer.Exit(code=EXIT_CHANGES)


def run(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point.

    Recognizes git's seven-argument external diff driver invocation and
    compares the old and new files it names. Git aborts a diff when the
    driver exits non-zero, so finding changes exits with 0 in that mode.
    """
    from sdiff.git.driver import detect_diff_driver_args

    args = list(sys.argv[1:] if argv is None else argv)
    driver_files = detect_diff_driver_args(args)
    if driver_files is None:
        app(args=args, prog_name="sdiff")
        return

    try:
        app(args=list(driver_files), prog_name="sdiff")
    except SystemExit as exc:
        if exc.code == EXIT_CHANGES:
            raise SystemExit(EXIT_NO_CHANGES) from None
        raise
