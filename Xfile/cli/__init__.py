"""
Command-line interface for Xfile.
"""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from Xfile.core.filters import PathFilter
from Xfile.core.lines import DEFAULT_LINES
from Xfile.core.lines import grep as grep_lines
from Xfile.core.lines import head as head_lines
from Xfile.core.lines import line_count
from Xfile.core.lines import tail as tail_lines
from Xfile.core.result import ErrorPolicy
from Xfile.core.search import grep_rl as grep_files
from Xfile.core.traversal import ls as list_paths
from Xfile.utils.log import setup_logging
from Xfile.utils.path_filters import glob_filter

app = typer.Typer(
    name="xfile",
    help="Xfile - lazy recursive ls, grep, grep -rl, head, tail and wc",
    add_completion=False,
)
console = Console()
error_console = Console(stderr=True)


def _fail(message: str) -> typer.Exit:
    error_console.print(f"[red]✗[/red] {escape(message)}", highlight=False)
    return typer.Exit(code=2)  # Error exit code


def _compile(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise _fail(f"Invalid regular expression {pattern!r}: {e}")


def _path_filter(
    contains: Optional[List[str]],
    regex: Optional[str],
    glob: Optional[List[str]],
) -> Optional[PathFilter]:
    """Turn the mutually exclusive filter options into a single PathFilter."""
    given = [name for name, value in (("--contains", contains), ("--regex", regex), ("--glob", glob)) if value]
    if len(given) > 1:
        raise _fail(f"Options {', '.join(given)} cannot be combined")

    if contains:
        return PathFilter.coerce(list(contains))
    if regex:
        return PathFilter.coerce(_compile(regex))
    if glob:
        return glob_filter(glob)
    return None


def _depth(recursive: bool, depth: Optional[int]):
    return depth if depth is not None else recursive


def _echo_lines(lines: Iterator[str]) -> int:
    """Write lines verbatim, returning how many were written."""
    count = 0
    for line in lines:
        typer.echo(line, nl=not line.endswith("\n"))
        count += 1
    return count


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr"),
) -> None:
    """Xfile - lazy recursive ls, grep, grep -rl, head, tail and wc."""
    setup_logging(verbose)


@app.command("ls")
def ls_command(
    directory: Path = typer.Argument(..., help="Directory to list"),
    recursive: bool = typer.Option(
        True, "--recursive/--no-recursive", "-r",
        help="Descend into subdirectories"
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", min=0,
        help="Maximum number of directory levels to descend (overrides --recursive)"
    ),
    contains: Optional[List[str]] = typer.Option(
        None, "--contains", "-c",
        help="Keep paths containing this text (repeatable, any may match)"
    ),
    regex: Optional[str] = typer.Option(None, "--regex", "-e", help="Keep paths matching this regex"),
    glob: Optional[List[str]] = typer.Option(
        None, "--glob", "-g",
        help="Keep paths whose name matches this glob (repeatable)"
    ),
    show_dirs: bool = typer.Option(False, "--show-dirs", help="List directories found at the depth limit"),
    on_error: ErrorPolicy = typer.Option(
        ErrorPolicy.WARN, "--on-error",
        help="Unreadable subdirectories: warn and skip, treat as a leaf, or raise"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output results as a JSON array"),
) -> None:
    """
    List files under a directory.

    Examples:

        # Everything below the current directory
        xfile ls .

        # Only direct children
        xfile ls ./logs --no-recursive

        # Two levels deep, text files only
        xfile ls ./project --depth 2 --glob "*.txt"
    """
    path_filter = _path_filter(contains, regex, glob)
    result = list_paths(
        str(directory),
        recursive=_depth(recursive, depth),
        filter=path_filter,
        show_dirs=show_dirs,
        on_error=on_error,
    )
    if not result.ok:
        raise _fail(result.error or f"Cannot list {directory}")

    try:
        if json_output:
            print(json.dumps(list(result.value), indent=2))
        else:
            for path in result.value:
                typer.echo(path)
    except OSError as e:
        raise _fail(f"Listing aborted: {e}")


@app.command()
def grep(
    pattern: str = typer.Argument(..., help="Text (or regex with --regex) to look for"),
    file: Path = typer.Argument(..., help="File to search"),
    regex: bool = typer.Option(False, "--regex", "-E", help="Treat PATTERN as a regular expression"),
) -> None:
    """
    Print the lines of FILE that match PATTERN.

    Exit code is 0 when something matched, 1 otherwise.
    """
    if not file.is_file():
        raise _fail(f"File not found: {file}")

    try:
        matched = _echo_lines(grep_lines(_compile(pattern) if regex else pattern, file))
    except OSError as e:
        raise _fail(f"Cannot read {file}: {e}")

    raise typer.Exit(code=0 if matched else 1)


@app.command("grep-rl")
def grep_rl(
    pattern: str = typer.Argument(..., help="Text (or regex with --regex) to look for"),
    directory: Path = typer.Argument(..., help="Directory to search"),
    regex: bool = typer.Option(False, "--regex", "-E", help="Treat PATTERN as a regular expression"),
    recursive: bool = typer.Option(
        True, "--recursive/--no-recursive", "-r",
        help="Descend into subdirectories"
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", min=0,
        help="Maximum number of directory levels to descend"
    ),
    glob: Optional[List[str]] = typer.Option(
        None, "--glob", "-g",
        help="Only search files whose name matches this glob (repeatable)"
    ),
    skip_binary: bool = typer.Option(False, "--skip-binary", help="Ignore files that look binary"),
) -> None:
    """
    Print the files under DIRECTORY that contain PATTERN, like grep -rl.

    Examples:

        # Log files mentioning an error
        xfile grep-rl "[error]" ./tmp/logs --glob "*.log"

        # Regex search, one level deep
        xfile grep-rl "TODO|FIXME" ./src --regex --depth 1
    """
    if not directory.is_dir():
        raise _fail(f"Not a directory: {directory}")

    try:
        found = 0
        for path in grep_files(
            _compile(pattern) if regex else pattern,
            str(directory),
            recursive=_depth(recursive, depth),
            filter=glob_filter(glob) if glob else None,
            skip_binary=skip_binary,
        ):
            typer.echo(path)
            found += 1
    except OSError as e:
        raise _fail(f"Search aborted: {e}")

    raise typer.Exit(code=0 if found else 1)


@app.command()
def head(
    file: Path = typer.Argument(..., help="File to read"),
    lines: int = typer.Option(DEFAULT_LINES, "--lines", "-n", min=1, help="Number of lines"),
) -> None:
    """Print the first lines of FILE."""
    if not file.is_file():
        raise _fail(f"File not found: {file}")
    try:
        _echo_lines(head_lines(file, lines))
    except OSError as e:
        raise _fail(f"Cannot read {file}: {e}")


@app.command()
def tail(
    file: Path = typer.Argument(..., help="File to read"),
    lines: int = typer.Option(DEFAULT_LINES, "--lines", "-n", min=1, help="Number of lines"),
) -> None:
    """Print the last lines of FILE."""
    if not file.is_file():
        raise _fail(f"File not found: {file}")
    try:
        _echo_lines(tail_lines(file, lines))
    except OSError as e:
        raise _fail(f"Cannot read {file}: {e}")


@app.command()
def wc(
    files: List[Path] = typer.Argument(..., help="Files to count"),
) -> None:
    """
    Count lines, like wc -l.

    A single file prints "COUNT FILE"; several files are shown as a table
    with a total.
    """
    counts = []
    problems: List[str] = []
    for file in files:
        if not file.exists():
            problems.append(f"File not found: {file}")
            continue
        try:
            result = line_count(file)
        except OSError as e:
            problems.append(f"Cannot read {file}: {e}")
            continue
        if not result.ok:
            problems.append(result.error or f"Cannot count {file}")
            continue
        counts.append((str(file), result.value))

    for problem in problems:
        error_console.print(f"[yellow]⚠[/yellow]  {escape(problem)}", highlight=False)

    if len(files) == 1 and counts:
        name, count = counts[0]
        typer.echo(f"{count} {name}")
    elif counts:
        table = Table(show_header=True)
        table.add_column("Lines", justify="right", style="cyan")
        table.add_column("File")
        for name, count in counts:
            table.add_row(str(count), name)
        table.add_row(str(sum(c for _, c in counts)), "total", style="bold")
        console.print(table)

    raise typer.Exit(code=2 if problems else 0)


@app.command()
def version() -> None:
    """Display version information."""
    from Xfile import __version__
    console.print(f"Xfile version {__version__}")


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
