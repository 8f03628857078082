"""SQLAlchemy implementation of ConversationRepository"""

from typing import List
from sqlalchemy import func, literal_column
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.conversation_repository import (
    AgentMessageCount,
    ConversationRepository,
    UNASSIGNED_AGENT,
)
from src.domain.conversation_message import ConversationMessage


class SqlAlchemyConversationRepository(ConversationRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def user_message_counts_by_agent(self, tenant_id: str, limit: int) -> List[AgentMessageCount]:
        # Inline literals keep the SELECT and GROUP BY expressions identical on PostgreSQL
        agent = func.coalesce(
            func.nullif(ConversationMessage.agent_id, literal_column("''")),
            literal_column(f"'{UNASSIGNED_AGENT}'"),
        )
        count = func.count()
        stmt = (
            select(agent.label("agent"), count.label("message_count"))
            .where(
                ConversationMessage.tenant_id == tenant_id,
                ConversationMessage.role == "user",
            )
            .group_by(agent)
            .order_by(count.desc(), agent.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [
            AgentMessageCount(agent=row.agent, message_count=int(row.message_count))
            for row in result.all()
        ]
