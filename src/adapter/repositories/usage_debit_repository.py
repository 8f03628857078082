"""SQLAlchemy implementation of UsageDebitRepository

Read-only queries over the usage debit log written by the metering service.
"""

from datetime import datetime
from typing import List
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.usage_debit_repository import (
    DailyUsage,
    ModelUsage,
    UsageDebitRepository,
)
from src.domain.usage_debit import UsageDebit


class SqlAlchemyUsageDebitRepository(UsageDebitRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_tenant_id(self, tenant_id: str) -> List[UsageDebit]:
        stmt = (
            select(UsageDebit)
            .where(UsageDebit.tenant_id == tenant_id)
            .order_by(UsageDebit.created_at.asc(), UsageDebit.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def daily_totals(self, tenant_id: str, since: datetime) -> List[DailyUsage]:
        day = func.date(UsageDebit.created_at)
        stmt = (
            select(
                day.label("day"),
                func.coalesce(func.sum(UsageDebit.input_tokens), 0).label("input_tokens"),
                func.coalesce(func.sum(UsageDebit.output_tokens), 0).label("output_tokens"),
                func.coalesce(func.sum(UsageDebit.cost_cents), 0).label("cost_cents"),
            )
            .where(UsageDebit.tenant_id == tenant_id, UsageDebit.created_at > since)
            .group_by(day)
            .order_by(day.asc())
        )
        result = await self.session.execute(stmt)
        return [
            DailyUsage(
                date=str(row.day),
                input_tokens=int(row.input_tokens),
                output_tokens=int(row.output_tokens),
                cost_cents=int(row.cost_cents),
            )
            for row in result.all()
        ]

    async def totals_by_model(self, tenant_id: str) -> List[ModelUsage]:
        cost = func.coalesce(func.sum(UsageDebit.cost_cents), 0)
        stmt = (
            select(
                UsageDebit.model,
                func.coalesce(func.sum(UsageDebit.input_tokens + UsageDebit.output_tokens), 0).label("total_tokens"),
                cost.label("cost_cents"),
            )
            .where(UsageDebit.tenant_id == tenant_id)
            .group_by(UsageDebit.model)
            .order_by(cost.desc(), UsageDebit.model.asc())
        )
        result = await self.session.execute(stmt)
        return [
            ModelUsage(
                model=row.model,
                total_tokens=int(row.total_tokens),
                cost_cents=int(row.cost_cents),
            )
            for row in result.all()
        ]
