"""CLI utilities for pymediasearch.

This module provides the top-level CLI `ArgumentParser` factory and wires
in subcommands from subpackages.
"""

from argparse import ArgumentParser
from functools import partial
from typing import Callable

from pymediasearch.meta import VERSION

from .Pexels import __name__ as Pexels_name
from .Pexels import __package__ as Pexels_package
from .Pexels.main import parser as Pexels_parser

__all__ = ("parser",)


def parser(parent: Callable[..., ArgumentParser] | None = None):
    """Return an ArgumentParser configured for the package CLI.

    If a `parent` callable is provided it will be used to construct the
    parser (useful when the command is embedded within another parser).
    """

    prog = __package__ or __name__

    parser = (ArgumentParser if parent is None else parent)(
        prog=f"python -m {prog}",
        description="search media libraries",
        add_help=True,
        allow_abbrev=False,
        exit_on_error=False,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"{prog} v{VERSION}",
        help="print version and exit",
    )
    subparsers = parser.add_subparsers(
        required=True,
    )
    Pexels_parser(
        partial(
            subparsers.add_parser,
            (Pexels_package or Pexels_name).replace(f"{prog}.", ""),
        )
    )
    return parser
