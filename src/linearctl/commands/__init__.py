"""Subcommand modules for linearctl.

Provides register_commands() which uses deferred imports to keep
``linearctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from linearctl.commands.search import search
    from linearctl.commands.serve import serve
    from linearctl.commands.whoami import whoami

    cli.add_command(serve)
    cli.add_command(whoami)
    cli.add_command(search)
