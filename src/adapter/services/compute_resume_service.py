"""Compute Resume Service Implementations

Best-effort calls asking the orchestration backend to resume a tenant.
"""

import logging
from typing import Optional
import httpx
from src.app.services.compute_resume_service import ComputeResumeService

logger = logging.getLogger(__name__)


class LoggingComputeResumeService(ComputeResumeService):
    """
    Resume service that only logs

    Used when no orchestration backend is configured.
    """

    async def resume_tenant(self, tenant_id: str) -> bool:
        logger.info(f"[RESUME] No resume backend configured; skipping tenant {tenant_id}")
        return True


class HttpComputeResumeService(ComputeResumeService):
    """
    Resume service that POSTs to the orchestration backend

    Failures are logged and reported as False, never raised or retried.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Orchestration backend base URL
            token: Bearer token for the backend admin API
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    async def resume_tenant(self, tenant_id: str) -> bool:
        url = f"{self.base_url}/api/admin/tenants/{tenant_id}/resume"
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, headers=headers)
                response.raise_for_status()
                logger.info(f"Resume requested for tenant {tenant_id}")
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to resume tenant {tenant_id}: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error resuming tenant {tenant_id}: {e}")
            return False


def create_resume_service(
    base_url: Optional[str] = None, token: str = "", timeout: float = 5.0
) -> ComputeResumeService:
    """
    Factory function for the configured resume service

    Args:
        base_url: Orchestration backend URL; logging-only service when unset
    """
    if base_url:
        return HttpComputeResumeService(base_url, token=token, timeout=timeout)
    return LoggingComputeResumeService()
