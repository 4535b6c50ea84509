"""Agent (directory user) model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from livechatkit.models.enums import AgentStatus, Role, UserPresence


class Agent(BaseModel):
    """A directory user that may serve livechat rooms."""

    id: str
    username: str
    name: str | None = None
    roles: list[str] = Field(default_factory=list)
    status: UserPresence = UserPresence.OFFLINE
    status_livechat: AgentStatus | None = None
    livechat_status_system_modified: bool = False
    operator: bool = False
    bot: bool = False
    livechat_data: dict[str, Any] = Field(default_factory=dict)
    emails: list[str] = Field(default_factory=list)

    @property
    def is_livechat_agent(self) -> bool:
        return Role.LIVECHAT_AGENT in self.roles
