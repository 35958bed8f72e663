"""LinearSession — the request-capable handle every service runs against.

Services receive a :class:`LinearSession` at construction time, the way they
would receive a database handle.  The HTTP transport is opened lazily on
first use so ``--help`` and tool discovery never need credentials.
"""

from __future__ import annotations

from types import TracebackType

from linearctl.config.settings import LinearSettings
from linearctl.infrastructure.auth import LinearAuth
from linearctl.infrastructure.transport import HttpTransport, Transport, build_async_client


class LinearSession:
    """Settings plus a lazily-opened transport.

    Pass *transport* to bypass authentication entirely (tests, or callers
    that manage their own client).
    """

    def __init__(self, settings: LinearSettings, *, transport: Transport | None = None) -> None:
        self.settings = settings
        self.auth = LinearAuth(settings)
        self._transport = transport
        self._owned: HttpTransport | None = None

    @property
    def transport(self) -> Transport:
        """The transport, opened on first access.

        Raises:
            AuthError: if no credential is configured.
        """
        if self._transport is None:
            token = self.auth.token()
            client = build_async_client(self.settings.api, token=token)
            self._owned = HttpTransport(client, url=self.settings.api.url)
            self._transport = self._owned
        return self._transport

    async def aclose(self) -> None:
        """Close the HTTP client if this session opened one."""
        if self._owned is not None:
            await self._owned.aclose()
            self._owned = None
            self._transport = None

    async def __aenter__(self) -> LinearSession:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
