#!/usr/bin/env python3
"""
pwnedcheck - Pwned Passwords command line
"""
import getpass
import logging
import sys
from typing import Optional

import click

from . import __version__
from .breach import BreachChecker, get_fingerprint
from .errors import PwnedCheckError

EXIT_NOT_FOUND = 0
EXIT_FOUND = 1
EXIT_ERROR = 2


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def prompt_password(password: Optional[str]) -> str:
    """Use the argument if given, otherwise prompt without echo"""
    if password is not None:
        return password
    return getpass.getpass("Password to check: ")


@click.group()
@click.version_option(version=__version__, prog_name="pwnedcheck")
def cli():
    """pwnedcheck - Has this password been in a data breach?

    Uses the Pwned Passwords range API (k-anonymity protocol).
    Only the first 5 characters of the password's SHA-1 hash are sent.
    """
    pass


@cli.command()
@click.argument('password', required=False)
@click.option('--timeout', '-t', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Give up after N seconds (default: wait indefinitely)')
@click.option('--verbose', '-v', is_flag=True, help='Log request details to stderr')
def check(password, timeout, verbose):
    """Check a password against known breaches

    Exits 0 when the password was not found, 1 when it was, 2 on error.

    Examples:
        pwnedcheck check              # Prompt for the password
        pwnedcheck check hunter2      # Password on the command line (ends up in shell history!)
    """
    configure_logging(verbose)
    password = prompt_password(password)

    try:
        result = BreachChecker(timeout=timeout).check_password(password)
    except PwnedCheckError as e:
        click.echo(f"❌ Breach check failed: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if result.found:
        click.echo(f"🚨 Pwned! This password has been seen {result.observed_count:,} times in breaches.")
        click.echo("   Do not use it.")
        sys.exit(EXIT_FOUND)

    click.echo("✅ Not found in any known breach.")
    click.echo("   (That alone doesn't make it a strong password.)")


@cli.command()
@click.argument('password', required=False)
def fingerprint(password):
    """Show the hash prefix that a check would send (no network call)"""
    fp = get_fingerprint(prompt_password(password))
    click.echo(f"Prefix sent to the API: {fp.prefix}")
    click.echo(f"Suffix kept locally:    {'*' * len(fp.suffix)}")


# Entry point
if __name__ == '__main__':
    cli()
