"""whoami — verify the API key and show the authenticated user."""

from __future__ import annotations

import click

from linearctl.commands._base import LinCommand
from linearctl.commands._context import AppContext
from linearctl.services.users import UserService


@click.command(
    cls=LinCommand,
    examples="""\
  # Check which account the configured API key belongs to
  linearctl whoami

  # Machine-readable
  linearctl --json whoami""",
)
@click.pass_obj
def whoami(app: AppContext) -> None:
    """Show the user the configured API key belongs to."""
    app.emit(app.run(lambda session: UserService(session).get_current_user()))
