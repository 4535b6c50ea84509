"""Transfer history: the audit trail of transfers and returns to queue."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from livechatkit.core.errors import InvalidTransferDataError
from livechatkit.models.enums import MessageType, TransferScope, TransferUserType
from livechatkit.models.message import MessageAuthor, TranscriptMessage
from livechatkit.models.room import Room
from livechatkit.models.transfer import TransferData, TransferRecord, TransferredBy
from livechatkit.store.base import ConversationStore

logger = logging.getLogger("livechatkit.history")


def resolve_scope(transfer_data: TransferData) -> TransferScope:
    """Explicit scope, else ``department`` with a destination department, else ``agent``."""
    if transfer_data.scope is not None:
        return transfer_data.scope
    if transfer_data.department is not None or transfer_data.department_id:
        return TransferScope.DEPARTMENT
    return TransferScope.AGENT


def validate_transferred_by(transfer_data: TransferData) -> TransferredBy:
    """Return the validated initiator, or raise ``InvalidTransferDataError``."""
    raw = transfer_data.transferred_by
    if isinstance(raw, TransferredBy):
        return raw
    if raw is None:
        raise InvalidTransferDataError("transferred_by is required")
    try:
        return TransferredBy.model_validate(raw)
    except ValidationError as exc:
        raise InvalidTransferDataError(f"Invalid transferred_by: {exc}") from exc


class TransferHistoryRecorder:
    """Writes one immutable transfer entry into the room transcript."""

    def __init__(self, store: ConversationStore) -> None:
        self._store = store

    async def record(self, room: Room, transfer_data: TransferData) -> TranscriptMessage:
        transferred_by = validate_transferred_by(transfer_data)
        scope = resolve_scope(transfer_data)
        next_department = (
            transfer_data.department.id
            if transfer_data.department is not None
            else transfer_data.department_id
        )
        logger.info(
            "Storing new chat transfer of %s [Transferred by: %s to %s]",
            room.id,
            transferred_by.id,
            scope,
            extra={"room_id": room.id},
        )

        record = TransferRecord(
            transferred_by=transferred_by,
            scope=scope,
            comment=transfer_data.comment,
            previous_department=room.department_id or None,
            next_department=next_department or None,
            transferred_to=transfer_data.transferred_to,
        )
        message = TranscriptMessage(
            room_id=room.id,
            type=MessageType.TRANSFER_HISTORY,
            author=MessageAuthor(id=transferred_by.id, username=transferred_by.username),
            token=(
                room.visitor.token
                if transferred_by.user_type == TransferUserType.VISITOR
                else None
            ),
            transfer_data=record,
        )
        return await self._store.add_message(message)
