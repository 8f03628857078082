"""Compute Resume Service Interface

Best-effort request to resume a tenant's compute after credits are added.
"""

from abc import ABC, abstractmethod


class ComputeResumeService(ABC):
    """
    Abstract resume service

    Implementations must not raise: a failed resume is logged and reported
    as False. The credit that triggered it is never rolled back.
    """

    @abstractmethod
    async def resume_tenant(self, tenant_id: str) -> bool:
        """
        Ask the orchestration backend to resume the tenant

        Args:
            tenant_id: Tenant whose compute should resume

        Returns:
            True if the backend accepted the request, False otherwise
        """
        pass
