"""Application errors raised by services and translated once at the HTTP boundary.

Services raise these instead of ``HTTPException`` so they stay usable outside a
request. ``backend.app.main`` registers a single handler that turns any
``ApplyDeskError`` into ``{"detail": message}`` with the error's status code.

Usage:
    from backend.app.core.errors import AuthorizationError

    if link is None:
        raise AuthorizationError("Collaboration link not found")
"""

from typing import Any, Dict, Optional


class ApplyDeskError(Exception):
    """Base error carrying a user-facing message and an HTTP status code."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message}


class AuthorizationError(ApplyDeskError):
    """Actor may not act on the requested student's data.

    401 when the actor cannot be identified, 403 for relationship or
    permission denials, 404 when the referenced student does not exist.
    """

    status_code = 403

    def __init__(self, message: str = "Not authorized", status_code: int = 403):
        super().__init__(message, status_code)


class NotFoundError(ApplyDeskError):
    status_code = 404

    def __init__(self, resource_type: str):
        super().__init__(f"{resource_type} not found")
        self.resource_type = resource_type


class InvalidRequestError(ApplyDeskError):
    """Malformed payload, e.g. a missing title or an invalid email."""

    status_code = 400


class ConflictError(ApplyDeskError):
    status_code = 409
