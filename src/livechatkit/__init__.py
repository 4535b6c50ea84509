"""livechatkit - async core for live-support transfers and agent availability."""

from livechatkit._version import __version__
from livechatkit.config import LivechatSettings
from livechatkit.core._helpers import Notifier, normalize_transferred_by
from livechatkit.core.agents import AgentStatusCoordinator
from livechatkit.core.availability import AvailabilityResolver
from livechatkit.core.framework import (
    DependencyFailureError,
    InvalidDepartmentError,
    InvalidInputError,
    InvalidTransferDataError,
    InvalidUserError,
    InvalidUserRoleError,
    InvalidVisitorError,
    Livechat,
    LivechatError,
    NotAllowedError,
    NotFoundError,
    PreconditionFailedError,
    ReturnToQueueFailedError,
    RoomClosedError,
    RoomNotFoundError,
    RoomOnHoldError,
    RoomRemovalError,
)
from livechatkit.core.history import TransferHistoryRecorder
from livechatkit.core.hooks import HookEngine, HookFn, HookRegistration
from livechatkit.core.rooms import RoomCoordinator
from livechatkit.core.transfer import ReturnToQueueSaga, TransferCoordinator
from livechatkit.departments.base import DepartmentStore
from livechatkit.departments.memory import InMemoryDepartmentStore
from livechatkit.directory.base import Directory
from livechatkit.directory.memory import InMemoryDirectory
from livechatkit.models.agent import Agent
from livechatkit.models.department import Department
from livechatkit.models.enums import (
    AgentStatus,
    ClientAction,
    InquiryStatus,
    LifecycleHook,
    MessageType,
    NotificationType,
    ReturnToQueueStage,
    Role,
    TransferScope,
    TransferUserType,
    UserPresence,
)
from livechatkit.models.inquiry import Inquiry
from livechatkit.models.message import MessageAuthor, TranscriptMessage
from livechatkit.models.results import UpdateResult
from livechatkit.models.room import Room, ServedBy, VisitorRef
from livechatkit.models.transfer import (
    TransferData,
    TransferRecord,
    TransferredBy,
    TransferTarget,
)
from livechatkit.models.visitor import Visitor
from livechatkit.notify import (
    InMemoryNotificationBus,
    MockNotificationBus,
    Notification,
    NotificationBus,
    NotificationCallback,
)
from livechatkit.policy import (
    AccessPolicy,
    AllowAllAccessPolicy,
    AlwaysOpenPolicy,
    BusinessHoursPolicy,
    MockAccessPolicy,
    MockBusinessHoursPolicy,
)
from livechatkit.routing import MockRoutingProvider, RoutingProvider
from livechatkit.store.base import ConversationStore
from livechatkit.store.memory import InMemoryStore

__all__ = [
    "AccessPolicy",
    "Agent",
    "AgentStatus",
    "AgentStatusCoordinator",
    "AllowAllAccessPolicy",
    "AlwaysOpenPolicy",
    "AvailabilityResolver",
    "BusinessHoursPolicy",
    "ClientAction",
    "ConversationStore",
    "Department",
    "DepartmentStore",
    "DependencyFailureError",
    "Directory",
    "HookEngine",
    "HookFn",
    "HookRegistration",
    "InMemoryDepartmentStore",
    "InMemoryDirectory",
    "InMemoryNotificationBus",
    "InMemoryStore",
    "Inquiry",
    "InquiryStatus",
    "InvalidDepartmentError",
    "InvalidInputError",
    "InvalidTransferDataError",
    "InvalidUserError",
    "InvalidUserRoleError",
    "InvalidVisitorError",
    "LifecycleHook",
    "Livechat",
    "LivechatError",
    "LivechatSettings",
    "MessageAuthor",
    "MessageType",
    "MockAccessPolicy",
    "MockBusinessHoursPolicy",
    "MockNotificationBus",
    "MockRoutingProvider",
    "NotAllowedError",
    "NotFoundError",
    "Notification",
    "NotificationBus",
    "NotificationCallback",
    "NotificationType",
    "Notifier",
    "PreconditionFailedError",
    "ReturnToQueueFailedError",
    "ReturnToQueueSaga",
    "ReturnToQueueStage",
    "Role",
    "Room",
    "RoomClosedError",
    "RoomCoordinator",
    "RoomNotFoundError",
    "RoomOnHoldError",
    "RoomRemovalError",
    "RoutingProvider",
    "ServedBy",
    "TranscriptMessage",
    "TransferCoordinator",
    "TransferData",
    "TransferHistoryRecorder",
    "TransferRecord",
    "TransferScope",
    "TransferTarget",
    "TransferUserType",
    "TransferredBy",
    "UpdateResult",
    "UserPresence",
    "Visitor",
    "VisitorRef",
    "__version__",
    "normalize_transferred_by",
]
