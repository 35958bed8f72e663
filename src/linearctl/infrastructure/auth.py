"""API-key authentication.

The backend accepts a personal API key (or an OAuth access token) verbatim in
the ``Authorization`` header.  Verifying the session here means "a credential
is configured"; whether the backend accepts it is learned on the first call.
"""

from __future__ import annotations

from linearctl.config.settings import LinearSettings
from linearctl.errors import AuthError


class LinearAuth:
    """Credential holder for one settings object."""

    def __init__(self, settings: LinearSettings) -> None:
        self._settings = settings

    @property
    def is_authenticated(self) -> bool:
        key = self._settings.api_key
        return key is not None and bool(key.get_secret_value().strip())

    def token(self) -> str:
        """Return the credential, or raise :class:`AuthError`."""
        if not self.is_authenticated:
            msg = "Not authenticated. Set LINEARCTL_API_KEY or api_key in linearctl.toml."
            raise AuthError(msg)
        assert self._settings.api_key is not None
        return self._settings.api_key.get_secret_value().strip()
