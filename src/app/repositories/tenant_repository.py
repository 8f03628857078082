"""Tenant Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.tenant import Tenant


class TenantRepository(ABC):

    @abstractmethod
    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        pass

    @abstractmethod
    async def set_gateway_customer_id(self, tenant_id: str, customer_id: str) -> None:
        """Persist the payment gateway customer id for a tenant"""
        pass
