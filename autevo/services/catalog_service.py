# autevo/services/catalog_service.py
import logging
from typing import Any, Dict, List, Optional

from autevo.core.errors import PreconditionFailedError
from autevo.db.models.service import Service
from autevo.db.repositories.service_repository import ServiceRepository
from autevo.schemas.common import Pagination
from autevo.schemas.service import ServiceCreate, ServiceUpdate
from autevo.services.base import TenantService

logger = logging.getLogger(__name__)


class CatalogService(TenantService):
    """Services offered by a shop"""

    def __init__(self, session, ctx):
        super().__init__(session, ctx)
        self.services = ServiceRepository(session)

    async def list(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Dict[str, Any]:
        items, total = await self.services.list_services(
            self.tenant_id, page, limit, search=search, is_active=is_active
        )
        return {"items": items, "pagination": Pagination.build(page, limit, total)}

    async def list_active(self) -> List[Service]:
        return await self.services.list_active(self.tenant_id)

    async def get(self, service_id: str) -> Service:
        return await self.services.get_scoped_or_raise(self.tenant_id, service_id)

    async def create(self, data: ServiceCreate) -> Service:
        async with self.transaction():
            service = await self.services.create({"tenant_id": self.tenant_id, **data.model_dump()})
        logger.info(f"Service created: {service.id}", extra=self.log_extra)
        return service

    async def update(self, service_id: str, data: ServiceUpdate) -> Service:
        async with self.transaction():
            service = await self.services.get_scoped_or_raise(self.tenant_id, service_id)
            await self.services.update(service, data.model_dump(exclude_unset=True))
        return service

    async def toggle_active(self, service_id: str) -> Service:
        async with self.transaction():
            service = await self.services.get_scoped_or_raise(self.tenant_id, service_id)
            await self.services.update(service, {"is_active": not service.is_active})
        return service

    async def delete(self, service_id: str) -> None:
        async with self.transaction():
            service = await self.services.get_scoped_or_raise(self.tenant_id, service_id)
            if await self.services.count_order_items(service.id) > 0:
                raise PreconditionFailedError(
                    "Service is used in service orders. Deactivate it instead."
                )
            await self.services.delete(service)
        logger.info(f"Service deleted: {service_id}", extra=self.log_extra)
