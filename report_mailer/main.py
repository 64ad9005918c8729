#!/usr/bin/env python3
# Path: report_mailer/main.py
"""
report_mailer - Main Entry Point

Runs one report definition: query the data source, build the
document, print it and/or mail it.

Usage:
    report-mailer sales.yaml               # Deliver as configured
    report-mailer sales.yaml --stdout      # Also print to the terminal
    report-mailer sales.yaml --no-mail     # Skip mail delivery
    report-mailer sales.yaml -f Markdown   # Override the output format
    report-mailer sales.yaml -v            # Debug logging

Exit codes:
    0    report delivered (a mail failure only prints a warning)
    1    configuration, data source, query, render or terminal failure
    130  interrupted
"""

import argparse
import sys
from typing import Optional, Sequence

from .config_loader import ConfigLoader
from .constants import OutputFormat, STATUS_FAIL, STATUS_OK, STATUS_WARN
from .core.logger import setup_ipo_logging, get_input_logger
from .definition import load_definition
from .exceptions import ReportError
from .pipeline import ReportRunner


def _parse_format(value: str) -> OutputFormat:
    try:
        return OutputFormat.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    """Command line definition."""
    parser = argparse.ArgumentParser(
        prog='report-mailer',
        description='report-mailer - SQL reports to the terminal or your inbox',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  report-mailer sales.yaml              Deliver as configured
  report-mailer sales.yaml --stdout     Print the report as well
  report-mailer sales.yaml --no-mail    Never send mail
        """
    )

    parser.add_argument(
        'config',
        help='YAML report definition'
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Debug logging'
    )
    verbosity.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only log errors'
    )

    parser.add_argument(
        '--format', '-f',
        type=_parse_format,
        help='Override output format (Html, Markdown, Txt)'
    )

    parser.add_argument(
        '--stdout',
        action='store_true',
        default=None,
        help='Print the report to the terminal'
    )

    parser.add_argument(
        '--no-mail',
        action='store_true',
        help='Skip mail delivery'
    )

    return parser


def _log_level(args: argparse.Namespace, config: ConfigLoader) -> str:
    if args.verbose:
        return 'DEBUG'
    if args.quiet:
        return 'ERROR'
    return config.get('log_level', 'INFO')


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for report_mailer.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = build_parser().parse_args(argv)

    config = ConfigLoader()
    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=_log_level(args, config),
        console_output=config.get('log_console', True),
    )
    logger = get_input_logger('main')

    try:
        definition = load_definition(args.config)
        result = ReportRunner(config).run(
            definition,
            output_format=args.format,
            stdout=args.stdout,
            send_mail=not args.no_mail,
        )
    except ReportError as e:
        logger.error(f"Report failed: {e}")
        print(f"{STATUS_FAIL} {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n[Interrupted]", file=sys.stderr)
        return 130

    outcome = result.outcome
    if outcome.mail_failed:
        print(f"{STATUS_WARN} Mail not sent: {outcome.mail_error}", file=sys.stderr)
    elif outcome.mail_sent and not args.quiet:
        print(f"{STATUS_OK} Mail sent", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
