"""Command line interface for psync."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from ._version import __version__
from .exceptions import PsyncError
from .verbs import dispatch

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("psync").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show ignored paths and the rsync command before transferring",
)
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    help="Pass --dry-run to rsync; create nothing and write no config",
)
@click.version_option(__version__, prog_name="psync")
@click.argument("args", nargs=-1, metavar="[VERB] [SOURCE] [DESTINATION]")
def main(verbose: bool, dry_run: bool, args: tuple[str, ...]) -> None:
    """Mirror a git working tree to another directory, skipping ignored files.

    \b
    VERB is one of:
      clone (checkout, co, c)  copy to a new location and record the pair
      sync (s)                 mirror local onto remote (the default)

    \b
    Examples:
      psync clone /mnt/backup/project   # copy the current repository
      psync clone /mnt/backup/           # into /mnt/backup/<name>
      psync                              # sync using psync_config
      psync sync /repo /backup           # explicit source and destination
    """
    _configure_logging(verbose)
    try:
        dispatch(list(args), cwd=Path.cwd(), verbose=verbose, dry_run=dry_run)
    except PsyncError as exc:
        logger.debug("Aborted", exc_info=True)
        click.echo(f"psync: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
