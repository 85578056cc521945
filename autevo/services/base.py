# autevo/services/base.py
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from autevo.core.logging import context_extra
from autevo.core.tenant import RequestContext

logger = logging.getLogger(__name__)


class TenantService:
    """
    Base for services acting on behalf of one authorized caller.

    The service owns the unit of work: repositories flush, `transaction()`
    commits on success and rolls back everything on any error.
    """

    def __init__(self, session: AsyncSession, ctx: RequestContext):
        self.session = session
        self.ctx = ctx

    @property
    def tenant_id(self) -> str:
        return self.ctx.require_tenant_id()

    @property
    def log_extra(self) -> dict:
        return context_extra(self.ctx)

    @asynccontextmanager
    async def transaction(self):
        try:
            yield
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
