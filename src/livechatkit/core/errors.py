"""Exception hierarchy for livechatkit.

Every error carries a stable ``code`` that callers can surface to clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from livechatkit.core.transfer import ReturnToQueueSaga


class LivechatError(Exception):
    """Base exception for all livechatkit errors."""

    code = "error-livechat"


# Input


class InvalidInputError(LivechatError):
    """Malformed identifiers or shapes, detected before any mutation."""

    code = "error-invalid-input"


class InvalidTransferDataError(InvalidInputError):
    """``transferred_by`` is missing or incomplete."""

    code = "error-invalid-transfer-data"


# Not found


class NotFoundError(LivechatError):
    code = "error-not-found"


class RoomNotFoundError(NotFoundError):
    code = "error-invalid-room"


class InvalidUserError(NotFoundError):
    code = "error-invalid-user"


class InvalidDepartmentError(NotFoundError):
    code = "error-invalid-department"


class InvalidVisitorError(NotFoundError):
    code = "error-invalid-visitor"


# Preconditions


class PreconditionFailedError(LivechatError):
    code = "error-precondition-failed"


class RoomOnHoldError(PreconditionFailedError):
    code = "error-room-onHold"


class RoomClosedError(PreconditionFailedError):
    code = "room-closed"


class InvalidUserRoleError(PreconditionFailedError):
    code = "invalid-user-role"


class NotAllowedError(PreconditionFailedError):
    code = "error-not-allowed"


# Dependencies


class DependencyFailureError(LivechatError):
    """An awaited collaborator call failed."""

    code = "error-dependency-failure"


class ReturnToQueueFailedError(DependencyFailureError):
    """Returning a room to the queue failed part-way.

    ``saga`` tells how far the operation got: when
    ``saga.history_recorded`` is true the transfer history entry was
    committed even though the agent was not unassigned.
    """

    code = "error-returning-inquiry"

    def __init__(self, message: str, saga: ReturnToQueueSaga) -> None:
        super().__init__(message)
        self.saga = saga


class RoomRemovalError(DependencyFailureError):
    code = "error-removing-room"
