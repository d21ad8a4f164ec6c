#!/usr/bin/env python3
import sys
import logging

import click

from vex_fixer.config import load_config, DEFAULT_CONFIG
from vex_fixer.context import RunContext
from vex_fixer.errors import VexFixError, ConfigError
from vex_fixer.pipeline import run_single, run_recursive

VERSION = "1.0.0"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# --- Helper Functions ---
def _setup_logging(level_name: str, verbose: bool):
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def _run_single_file(context: RunContext, config: dict, input_file, output_file) -> int:
    if not input_file:
        input_file = context.prompt("File to parse", default=config["input_file"])
    if not output_file:
        output_file = context.prompt("Output file", default=config["output_file"])
    try:
        run_single(input_file, output_file, context, config)
    except VexFixError as e:
        context.error(str(e))
        return 1
    return 0


def _run_folder(context: RunContext, config: dict, root) -> int:
    try:
        run_recursive(root, context, config)
    except VexFixError as e:
        # Only a bad starting directory gets here; per-file errors are reported inside
        context.error(str(e))
        return 1
    return 0


# --- CLI Definition ---
@click.command(context_settings=dict(help_option_names=['-h', '--help']))
@click.option("--folder", is_flag=True, help="Process every vex.json in the current directory and its subdirectories.")
@click.option("--root", type=click.Path(file_okay=False), help="Directory to scan with --folder instead of the current one.")
@click.option("-i", "--input", "input_file", type=str, help="File to parse (skips the prompt).")
@click.option("-o", "--output", "output_file", type=str, help="Output file (skips the prompt).")
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False), help="YAML configuration file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("--no-color", is_flag=True, help="Disable coloured output.")
@click.version_option(VERSION, prog_name="vexfix")
def cli(folder, root, input_file, output_file, config_path, verbose, no_color):
    """
    vexfix: rewrites the timestamps of VEX documents as RFC3339 UTC.

    Without --folder you are asked for the file to parse and where to write
    the result. Files where every statement is 'not_affected' are flagged,
    since GUAC ignores them.
    """
    # Provisional level so config loading is logged under --verbose
    _setup_logging(DEFAULT_CONFIG["log_level"], verbose)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="'--config'")

    _setup_logging(config["log_level"], verbose)

    if folder and (input_file or output_file):
        raise click.UsageError("--input/--output cannot be combined with --folder.")
    if root and not folder:
        raise click.UsageError("--root only applies together with --folder.")

    context = RunContext(color=config["color"] and not no_color)
    if folder:
        exit_code = _run_folder(context, config, root)
    else:
        exit_code = _run_single_file(context, config, input_file, output_file)
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
