"""SQLAlchemy implementation of TenantRepository"""

from typing import Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.tenant_repository import TenantRepository
from src.domain.tenant import Tenant


class SqlAlchemyTenantRepository(TenantRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, tenant: Tenant) -> Tenant:
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def set_gateway_customer_id(self, tenant_id: str, customer_id: str) -> None:
        stmt = (
            update(Tenant)
            .where(Tenant.id == tenant_id)
            .values(gateway_customer_id=customer_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
