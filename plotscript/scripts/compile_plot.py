#!/usr/bin/env python3
"""
Compile Plot Script.

Compile a YAML document description into a gnuplot script, and
optionally run it.

Usage:
    python -m plotscript.scripts.compile_plot figure.yaml
    python -m plotscript.scripts.compile_plot figure.yaml --terminal png --output fig.png --run
    python -m plotscript.scripts.compile_plot figure.yaml --script-out figure.gp

Terminal settings on the command line override the ``terminal`` section
of the configuration file.
"""

from __future__ import annotations

import argparse
import logging
import sys

from plotscript.configs.document_loader import load_document
from plotscript.configs.loader import ConfigError, PlotConfig, load_config
from plotscript.runner.gnuplot_runner import GNUPlotError, GNUPlotRunner
from plotscript.script.terminal import Terminal
from plotscript.utils.logging_config import (
    LOG_LEVELS,
    pop_context,
    push_context,
    setup_logging,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compile a plot description into a gnuplot script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "document",
        type=str,
        help="Document description file (YAML)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Configuration file path",
    )
    parser.add_argument(
        "--terminal",
        "-t",
        type=str,
        help="gnuplot terminal, e.g. 'pngcairo size 800,600'",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="File the gnuplot terminal writes to",
    )
    parser.add_argument(
        "--script-out",
        type=str,
        help="Write the script to this file instead of stdout",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Pipe the script to gnuplot",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the configured log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(
        args.log_level or config.logging.level,
        config.logging.file,
        json=config.logging.json,
        context={"app": "compile_plot"},
    )

    push_context(document=args.document)
    try:
        return _compile(args, config)
    finally:
        pop_context(keys=["document"])


def _compile(args: argparse.Namespace, config: PlotConfig) -> int:
    terminal = Terminal.from_config(config.terminal)
    if args.terminal is not None or args.output is not None:
        terminal = Terminal(
            device_type=args.terminal if args.terminal is not None else terminal.device_type,
            output_path=args.output if args.output is not None else terminal.output_path,
        )

    try:
        doc = load_document(args.document, config.layout)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Cannot load document: %s", e)
        return 1

    script = doc.compile(terminal)

    if args.script_out:
        doc.write_script(args.script_out, terminal)
    elif not args.run:
        sys.stdout.write(script)

    if args.run:
        runner = GNUPlotRunner.from_config(config.runner)
        try:
            result = runner.run(script)
        except GNUPlotError as e:
            logger.error("%s", e)
            return 1
        if result.stdout:
            sys.stdout.write(result.stdout)
        logger.info("gnuplot finished")

    return 0


if __name__ == "__main__":
    sys.exit(main())
