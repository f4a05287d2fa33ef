"""Command-line interface for the qbank question bank converter.

Examples
--------
Convert an exported bank to JSON:
    $ qbank parse bank.docx --out bank.json

Convert a stored raw pair instead of the package:
    $ qbank parse bank.raw.json

Extract the raw ``[document, numbering]`` pair for upload:
    $ qbank stringify bank.docx --out bank.raw.json

Narrow the output by query and tags:
    $ qbank parse bank.docx --query murmur --tag Cardiology --tag Auscultation

List every tag of a bank:
    $ qbank tags bank.docx

Use environment variables for defaults:
    $ export QBANK_LOG_LEVEL=DEBUG
    $ export QBANK_MAX_PARAGRAPHS=50000
    $ qbank parse bank.docx
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/qbank/cli.py

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from qbank import __version__
from qbank.api import blob_to_raw_question_bank, parse_question_bank
from qbank.ast.nodes import QuestionBank, RawQuestionBank
from qbank.ast.serialization import bank_to_json
from qbank.constants import DEFAULT_JSON_INDENT, DEFAULT_LOG_LEVEL, ENV_VAR_PREFIX
from qbank.exceptions import MalformedFileError, ParsingError, QBankError
from qbank.logging_utils import configure_logging, log_progress_event
from qbank.options.docx import QuestionBankOptions
from qbank.parsers.package import raw_from_json, raw_to_json
from qbank.search import collect_tags, filter_question_bank

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with QBANK_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'log_level', 'max_paragraphs')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set
    """
    env_key = f"{ENV_VAR_PREFIX}{key.upper().replace('-', '_')}"
    return os.environ.get(env_key)


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    CLI arguments still take precedence over environment variables.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        The argument parser to modify
    """
    for action in parser._actions:
        if not action.dest or action.dest in ("help", "version", "command", "input"):
            continue

        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        env_key = f"{ENV_VAR_PREFIX}{action.dest.upper()}"
        if action.type in (int, float):
            try:
                action.default = action.type(env_value)
            except ValueError:
                logging.warning(f"Invalid {action.type.__name__} value for {env_key}: {env_value}")
        elif action.choices:
            if env_value in action.choices:
                action.default = env_value
            else:
                logging.warning(f"Invalid choice for {env_key}: {env_value}. Choices: {list(action.choices)}")
        elif isinstance(action, argparse._StoreTrueAction):
            action.default = env_value.lower() in _TRUE_VALUES
        elif isinstance(action, argparse._AppendAction):
            action.default = [value.strip() for value in env_value.split(",") if value.strip()]
        else:
            action.default = env_value


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="Question bank .docx file, a raw [document, numbering] .json file, or '-'")
    parser.add_argument("--out", "-o", metavar="PATH", help="Write output to PATH instead of stdout")
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Treat the input as a raw [document, numbering] JSON array (implied by a .json suffix)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=DEFAULT_LOG_LEVEL,
        help=f"Set logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with debug logging, timestamps and logger names",
    )


def _add_budget_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-paragraphs",
        type=int,
        metavar="N",
        help="Stop with an error after N paragraphs (default: unlimited)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help="Stop with an error after SECONDS of parsing (default: unlimited)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its ``parse``, ``stringify`` and ``tags`` commands."""
    parser = argparse.ArgumentParser(
        prog="qbank",
        description="Convert Word question banks into structured JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples\n--------\n", 1)[-1] if __doc__ else None,
    )
    parser.add_argument("--version", action="version", version=f"qbank {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    parse_parser = subparsers.add_parser("parse", help="Parse a question bank into JSON")
    _add_common_arguments(parse_parser)
    _add_budget_arguments(parse_parser)
    parse_parser.add_argument("--query", "-q", help="Keep only items whose key contains QUERY (case-insensitive)")
    parse_parser.add_argument(
        "--tag",
        "-t",
        action="append",
        dest="tags",
        metavar="TAG",
        default=[],
        help="Keep only items carrying TAG; repeat to require several tags",
    )
    parse_parser.add_argument(
        "--indent",
        type=int,
        default=DEFAULT_JSON_INDENT,
        help=f"JSON indentation (default: {DEFAULT_JSON_INDENT}); 0 for compact output",
    )

    stringify_parser = subparsers.add_parser(
        "stringify", help="Extract the raw [document, numbering] JSON pair from a .docx"
    )
    _add_common_arguments(stringify_parser)

    tags_parser = subparsers.add_parser("tags", help="List every tag of a question bank, one per line")
    _add_common_arguments(tags_parser)
    _add_budget_arguments(tags_parser)

    for subparser in (parse_parser, stringify_parser, tags_parser):
        apply_env_vars_to_parser(subparser)

    return parser


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input_bytes(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _load_raw(parsed_args: argparse.Namespace, options: QuestionBankOptions) -> RawQuestionBank:
    data = _read_input_bytes(parsed_args.input)
    if parsed_args.raw or parsed_args.input.lower().endswith(".json"):
        return raw_from_json(data)
    return blob_to_raw_question_bank(data, parser_options=options)


def _options_from_args(parsed_args: argparse.Namespace) -> QuestionBankOptions:
    return QuestionBankOptions(
        max_paragraphs=getattr(parsed_args, "max_paragraphs", None),
        timeout_seconds=getattr(parsed_args, "timeout", None),
    )


def _parse_bank(parsed_args: argparse.Namespace) -> QuestionBank:
    options = _options_from_args(parsed_args)
    raw = _load_raw(parsed_args, options)
    return parse_question_bank(raw, parser_options=options, progress_callback=log_progress_event)


def _write_output(content: str, out: Optional[str]) -> None:
    if out:
        output_path = Path(out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content + "\n", encoding="utf-8")
        logger.info("Output written to %s", output_path)
    else:
        print(content)


def _run_parse(parsed_args: argparse.Namespace) -> int:
    bank = _parse_bank(parsed_args)
    bank = filter_question_bank(bank, parsed_args.query, parsed_args.tags)
    _write_output(bank_to_json(bank, indent=parsed_args.indent or None), parsed_args.out)
    return 0


def _run_stringify(parsed_args: argparse.Namespace) -> int:
    raw = _load_raw(parsed_args, _options_from_args(parsed_args))
    if raw.is_empty():
        print(f"Error: No question bank body found in {parsed_args.input}", file=sys.stderr)
        return 1
    _write_output(raw_to_json(raw), parsed_args.out)
    return 0


def _run_tags(parsed_args: argparse.Namespace) -> int:
    bank = _parse_bank(parsed_args)
    _write_output("\n".join(collect_tags(bank)), parsed_args.out)
    return 0


_COMMANDS = {
    "parse": _run_parse,
    "stringify": _run_stringify,
    "tags": _run_tags,
}


def main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging(parsed_args)

    try:
        return _COMMANDS[parsed_args.command](parsed_args)
    except FileNotFoundError as e:
        print(f"Error: Input file not found: {e.filename}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: Invalid option: {e}", file=sys.stderr)
        return 1
    except MalformedFileError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ParsingError as e:
        print(f"Error: Parsing stopped after {e.paragraphs_processed} paragraphs: {e.message}", file=sys.stderr)
        return 1
    except QBankError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
