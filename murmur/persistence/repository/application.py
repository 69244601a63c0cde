"""PostgreSQL implementation of Application repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.domain.model import Application
from murmur.domain.repository import ApplicationRepository
from murmur.domain.value import AppKey, ApplicationId
from murmur.persistence.mappers import application_to_dict, row_to_application
from murmur.persistence.tables import apps_table


class PostgresApplicationRepository(ApplicationRepository):
    """PostgreSQL implementation of ApplicationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, application_id: ApplicationId) -> Optional[Application]:
        """Find an application by ID."""
        stmt = select(apps_table).where(apps_table.c.id == application_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_application(dict(row)) if row else None

    async def find_by_app_key(self, app_key: AppKey) -> Optional[Application]:
        """Find an application by its public app key."""
        stmt = select(apps_table).where(apps_table.c.app_key == app_key.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_application(dict(row)) if row else None

    async def save(self, application: Application) -> Application:
        """Save an application (upsert on id)."""
        values = application_to_dict(application)
        stmt = insert(apps_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[apps_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return application
