#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Command-line interface for mdprint.

Convert one Markdown file, or every ``.md`` file under a directory, to PDF::

    $ mdprint -i notes.md
    notes.md -> notes.pdf

    $ mdprint -i docs/ -s 595,842 -m 40,48,40,48 -z 50% --jobs 4

Options not given on the command line are taken from ``MDPRINT_*``
environment variables, then from the configuration file (see
:mod:`mdprint.config`).
"""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from rich.console import Console

from mdprint import __version__
from mdprint.builder import convert_file, default_output_path
from mdprint.config import (
    build_layout_options,
    build_print_styles,
    build_renderer_options,
    load_settings,
    resolve_config_path,
)
from mdprint.exceptions import DependencyError, FileError, MdPrintError, RenderingError, ValidationError
from mdprint.logging_utils import configure_logging, resolve_log_level
from mdprint.options import LayoutOptions, PdfRendererOptions, PrintStyles

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdprint",
        description="Convert Markdown files to print-ready PDF.",
    )
    parser.add_argument("-i", "--input", required=True, help="Markdown file, or a directory searched recursively")
    parser.add_argument("-o", "--output", help="Output PDF file (single file input only)")
    parser.add_argument("-s", "--size", help="Page size as width,height in points. Ex.: 612,792")
    parser.add_argument("-m", "--margins", help="Page margins as left,top,right,bottom in points. Ex.: 36,48,36,48")
    parser.add_argument("-z", "--imgsize", help="Maximum image width in points or percent of the text width. Ex.: 50%%")
    parser.add_argument("--config", help="Configuration file (.toml, .json or pyproject.toml)")
    parser.add_argument("--dump-json", action="store_true", help="Also write the document definition as <output>.json")
    parser.add_argument("--jobs", type=int, default=1, help="Number of files converted in parallel (default: 1)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timing information")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def collect_inputs(input_path: Path) -> list[Path]:
    """Return the Markdown files to convert.

    Raises
    ------
    FileError
        If the input does not exist

    """
    if input_path.is_dir():
        return sorted(path for path in input_path.rglob("*.md") if path.is_file())
    if input_path.is_file():
        return [input_path]
    raise FileError(f"Input not found: {input_path}", file_path=str(input_path))


def _output_for(input_file: Path, output: str | None, single: bool) -> Path:
    if single and output and not Path(output).is_dir():
        return Path(output)
    return default_output_path(input_file)


def _convert_one(
    input_file: Path,
    output_file: Path,
    layout: LayoutOptions,
    styles: PrintStyles,
    renderer_options: PdfRendererOptions,
    dump_json: bool,
) -> Path:
    dump_path = output_file.with_suffix(".json") if dump_json else None
    return convert_file(
        input_file,
        output_file,
        layout=layout,
        styles=styles,
        renderer_options=renderer_options,
        dump_json=dump_path,
    )


def process_files(
    inputs: list[Path],
    args: argparse.Namespace,
    settings: dict[str, Any],
    config_path: Path | None,
    console: Console,
) -> int:
    """Convert every input file, reporting progress on the console.

    Returns
    -------
    int
        ``EXIT_SUCCESS``, or the exit code of the first failure

    """
    layout = build_layout_options(settings)
    styles = build_print_styles(settings)
    renderer_options = build_renderer_options(settings, config_path.parent if config_path else None)

    single = len(inputs) == 1 and not Path(args.input).is_dir()
    jobs = [(path, _output_for(path, args.output, single)) for path in inputs]
    exit_code = EXIT_SUCCESS

    with ThreadPoolExecutor(max_workers=max(1, args.jobs)) as executor:
        futures = {
            executor.submit(_convert_one, src, dst, layout, styles, renderer_options, args.dump_json): (src, dst)
            for src, dst in jobs
        }
        for future in as_completed(futures):
            src, dst = futures[future]
            try:
                future.result()
            except Exception as e:
                code = get_exit_code_for_exception(e)
                if exit_code == EXIT_SUCCESS:
                    exit_code = code
                logger.debug(f"Conversion of {src} failed", exc_info=True)
                console.print(f"[red]Error:[/red] {src}: {e}", highlight=False)
                continue
            console.print(f"{src} -> {dst}", highlight=False)

    return exit_code


def main(args: list[str] | None = None) -> int:
    """Execute the mdprint command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    console = Console(stderr=False)
    error_console = Console(stderr=True)

    try:
        config_path = resolve_config_path(parsed_args.config)
        settings = load_settings(
            config_path,
            cli_overrides={
                "size": parsed_args.size,
                "margins": parsed_args.margins,
                "imgsize": parsed_args.imgsize,
                "log_level": parsed_args.log_level,
            },
        )
    except MdPrintError as e:
        error_console.print(f"[red]Error:[/red] {e}", highlight=False)
        return get_exit_code_for_exception(e)

    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = resolve_log_level(settings.get("log_level") or logging.WARNING)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    if parsed_args.jobs < 1:
        error_console.print("[red]Error:[/red] --jobs must be at least 1", highlight=False)
        return EXIT_VALIDATION_ERROR

    try:
        inputs = collect_inputs(Path(parsed_args.input))
        if not inputs:
            logger.warning(f"No Markdown files found under {parsed_args.input}")
            return EXIT_SUCCESS
        return process_files(inputs, parsed_args, settings, config_path, console)
    except MdPrintError as e:
        error_console.print(f"[red]Error:[/red] {e}", highlight=False)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
