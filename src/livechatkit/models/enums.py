"""All string enums for livechatkit."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class AgentStatus(StrEnum):
    """Livechat-specific availability of an agent."""

    AVAILABLE = "available"
    NOT_AVAILABLE = "not-available"
    UNAVAILABLE = "unavailable"


@unique
class UserPresence(StrEnum):
    """Generic presence of a user, independent of livechat."""

    ONLINE = "online"
    AWAY = "away"
    BUSY = "busy"
    OFFLINE = "offline"


@unique
class TransferScope(StrEnum):
    DEPARTMENT = "department"
    AGENT = "agent"
    QUEUE = "queue"


@unique
class TransferUserType(StrEnum):
    AGENT = "agent"
    USER = "user"
    VISITOR = "visitor"
    SYSTEM = "system"


@unique
class InquiryStatus(StrEnum):
    QUEUED = "queued"
    TAKEN = "taken"
    READY = "ready"


@unique
class Role(StrEnum):
    LIVECHAT_AGENT = "livechat-agent"
    LIVECHAT_MANAGER = "livechat-manager"


@unique
class MessageType(StrEnum):
    TRANSFER_HISTORY = "livechat_transfer_history"


@unique
class LifecycleHook(StrEnum):
    AGENT_STATUS_CHANGED = "livechat.agentStatusChanged"
    SET_USER_STATUS = "livechat.setUserStatusLivechat"
    AGENT_CREATED = "livechat.onNewAgentCreated"
    AGENT_REMOVED = "livechat.afterAgentRemoved"
    AFTER_RETURN_ROOM_AS_INQUIRY = "livechat:afterReturnRoomAsInquiry"


@unique
class NotificationType(StrEnum):
    AGENT_STATUS = "agentStatus"
    VISITOR_DATA = "visitorData"
    USER_CHANGED = "userChanged"
    INQUIRY_CHANGED = "inquiryChanged"


@unique
class ClientAction(StrEnum):
    INSERTED = "inserted"
    UPDATED = "updated"
    REMOVED = "removed"


@unique
class ReturnToQueueStage(StrEnum):
    """How far a return-to-queue got."""

    PENDING = "pending"
    HISTORY_RECORDED = "history_recorded"
    COMPLETED = "completed"
