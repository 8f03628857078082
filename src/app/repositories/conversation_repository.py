"""Conversation Repository Interface

Read-only statistics over the conversation store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

UNASSIGNED_AGENT = "Unassigned"


@dataclass(frozen=True)
class AgentMessageCount:
    agent: str
    message_count: int


class ConversationRepository(ABC):

    @abstractmethod
    async def user_message_counts_by_agent(self, tenant_id: str, limit: int) -> List[AgentMessageCount]:
        """
        Count user-authored messages per agent, busiest first

        Messages without an agent are grouped under UNASSIGNED_AGENT.
        """
        pass
