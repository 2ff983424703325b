#!/usr/bin/env python3
"""
Generate an HTML reference of configuration variables from a Kconfig tree.

Usage:
    kconfig2html -o Documentation/NuttXConfigVariables.html nuttx
    kconfig2html -a ../apps -i --template template.yaml nuttx > config.html
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .config import build_config
from .errors import ExitCode, KconfigError, OutputOpenError, UsageError
from .parser import KconfigParser
from .paths import SourceResolver
from .renderer import HtmlDocument
from .state import ParserState

logger = logging.getLogger(__name__)


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with distinct exit codes."""

    def error(self, message):
        if "expected one argument" in message:
            raise UsageError(f"Missing option argument: {message}", ExitCode.MISSING_OPTION_ARGUMENT)
        raise UsageError(f"Unexpected option: {message}", ExitCode.UNEXPECTED_OPTION)


def build_parser() -> UsageParser:
    parser = UsageParser(
        prog='kconfig2html',
        description='Generate an HTML reference of Kconfig configuration variables',
    )
    parser.add_argument('-a', '--apps-dir', dest='apps_dir',
                        help='Path to the apps/ directory, relative to the Kconfig root (default: ../apps)')
    parser.add_argument('-o', '--output', help='Output file path (default: stdout)')
    parser.add_argument('-i', '--internal', action='store_true',
                        help='Show hidden, internal configuration variables')
    parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')
    parser.add_argument('-v', '--verbose', action='store_true', help='Report progress on stderr')
    parser.add_argument('-t', '--template', help='Optional .py, .yaml or .json settings file')
    parser.add_argument('--title', help='Document title (overrides template)')
    parser.add_argument('kconfig_root', nargs='?', default='.',
                        help='Directory containing the root Kconfig file (default: .)')
    return parser


def parse_arguments(parser: UsageParser, argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse argv, separating unknown flags from surplus positional arguments."""
    args, extras = parser.parse_known_args(argv)
    for extra in extras:
        if extra.startswith('-') and extra != '-':
            raise UsageError(f"Unrecognized option: {extra}", ExitCode.UNRECOGNIZED_OPTION)
    if extras:
        raise UsageError("Unexpected garbage at the end of the line", ExitCode.TOO_MANY_ARGUMENTS)
    return args


def configure_logging(debug: bool = False, verbose: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(stream=sys.stderr, format='%(levelname)s: %(message)s')
    logging.getLogger('kconfig2html').setLevel(level)


def generate_html(config: Dict[str, Any], kconfig_root: str = '.') -> str:
    """Walk the Kconfig tree under kconfig_root and return the complete document."""
    resolver = SourceResolver(
        kconfig_root,
        apps_dir=config['apps_dir'],
        apps_token=config['apps_token'],
        kconfig_name=config['kconfig_name'],
    )

    with HtmlDocument() as document:
        state = ParserState.from_config(document, config)
        KconfigParser(state, resolver).run(kconfig_root)
        return document.compose(state.generator.header(), state.generator.trailer())


def write_output(text: str, outfile: Optional[str]) -> None:
    if outfile:
        try:
            with open(outfile, 'w') as f:
                f.write(text)
        except OSError as e:
            raise OutputOpenError(f"write failed: {e.strerror or e}", outfile)
    else:
        sys.stdout.write(text)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parse_arguments(parser, argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return e.exit_code

    configure_logging(args.debug, args.verbose)

    logger.debug("Using <Kconfig directory>: %s", args.kconfig_root)
    logger.debug("Using <apps directory>:    %s", args.apps_dir or "(template/default)")
    logger.debug("Using <out file>:          %s", args.output or "stdout")

    outfile_created = False
    succeeded = False
    try:
        config = build_config(args.template, {
            'title': args.title,
            'apps_dir': args.apps_dir,
            'show_internal': True if args.internal else None,
        })

        # Open the output before parsing so an unwritable path fails early
        if args.output:
            try:
                open(args.output, 'w').close()
            except OSError as e:
                raise OutputOpenError(f"open failed: {e.strerror or e}", args.output)
            outfile_created = True

        text = generate_html(config, args.kconfig_root)
        write_output(text, args.output)
        succeeded = True

    except KconfigError as e:
        logger.error("%s", e)
        return e.exit_code

    finally:
        # No partial or empty document is left behind, whatever the failure
        if outfile_created and not succeeded and os.path.exists(args.output):
            os.unlink(args.output)

    if args.output:
        logger.info("HTML documentation written to: %s", args.output)
    return ExitCode.SUCCESS


if __name__ == '__main__':
    sys.exit(main())
