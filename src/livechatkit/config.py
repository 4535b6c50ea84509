"""Runtime settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LivechatSettings:
    """Settings read by the coordinators at call time.

    Attributes:
        accept_chats_with_no_agents: Report the service as online even
            when no agent is available.
        assign_new_conversation_to_bot: Treat a department as online when
            it has at least one bot agent.
        enabled_when_agent_idle: Count idle (away/busy) agents as online.
        show_agent_info: Broadcast agent status changes to the rooms the
            agent serves.
        hook_timeout: Max execution time in seconds for each lifecycle hook.
    """

    accept_chats_with_no_agents: bool = False
    assign_new_conversation_to_bot: bool = False
    enabled_when_agent_idle: bool = False
    show_agent_info: bool = False
    hook_timeout: float = 30.0
