"""Classified failures raised below the service boundary.

Services catch :class:`LinearctlError` subclasses and convert them into a
failed :class:`~linearctl.services.result.ServiceResult` whose error code is
the class's ``code``.  Anything else is a bug and propagates.
"""

from __future__ import annotations

from typing import Any


class LinearctlError(Exception):
    """Base class for every classified failure."""

    code = "ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


class ValidationError(LinearctlError):
    """Required argument missing or of the wrong shape. No backend call was made."""

    code = "VALIDATION_FAILED"


class AuthError(LinearctlError):
    """No usable session could be established."""

    code = "AUTH_REQUIRED"


class TransportError(LinearctlError):
    """Network, HTTP or GraphQL protocol failure."""

    code = "TRANSPORT_FAILED"


class UpstreamError(LinearctlError):
    """The backend call failed or reported ``success: false``."""

    code = "UPSTREAM_FAILED"


class CompositeError(UpstreamError):
    """A step of a multi-step operation failed.

    ``outcome`` is the :class:`~linearctl.services.composite.CompositeResult`
    describing which steps ran and which of them committed.
    """

    code = "COMPOSITE_FAILED"

    def __init__(self, message: str, *, outcome: Any, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message, detail=detail)
        self.outcome = outcome
