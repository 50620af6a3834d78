from typing import Any, Generic, List, Optional, Type, TypeVar
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from asset_catalog.core.exceptions import DatabaseError
from asset_catalog.utils.logging import get_logger

# Define a generic type for SQLAlchemy models
ModelType = TypeVar("ModelType")

LOGGER = get_logger(__name__)


class BaseRepository(Generic[ModelType]):
    """Base repository implementing common CRUD operations.

    Failed statements are rolled back, logged and re-raised as
    ``DatabaseError`` so callers never see a half-applied write.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session
            model: The SQLAlchemy model class this repository manages
        """
        self.session = session
        self.model = model
        self.logger = LOGGER

    async def _fail(self, action: str, error: SQLAlchemyError) -> None:
        await self.session.rollback()
        self.logger.error(
            f"Error {action} {self.model.__name__}: {str(error)}",
            exc_info=True
        )
        raise DatabaseError(f"Failed {action} {self.model.__name__}", original_error=error) from error

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Get a record by its ID.

        Args:
            id: Primary key of the record

        Returns:
            The record if found, None otherwise
        """
        try:
            query = select(self.model).where(self.model.id == id)
            result = await self.session.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._fail("retrieving", e)

    async def get_all(self, order_by: Optional[List[Any]] = None) -> List[ModelType]:
        """Get all records, optionally sorted.

        Args:
            order_by: Column expressions to sort by

        Returns:
            List of records
        """
        try:
            query = select(self.model)
            if order_by:
                query = query.order_by(*order_by)

            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._fail("listing", e)

    async def create(self, **kwargs) -> ModelType:
        """Create and commit a new record.

        Args:
            **kwargs: Fields and values for the new record

        Returns:
            The created record
        """
        try:
            instance = self.model(**kwargs)
            self.session.add(instance)
            await self.session.flush()
            await self.session.commit()
            return instance
        except SQLAlchemyError as e:
            await self._fail("creating", e)

    async def update(self, id: Any, **kwargs) -> Optional[ModelType]:
        """Update and commit an existing record.

        Args:
            id: Primary key of the record to update
            **kwargs: Fields and values to update

        Returns:
            The updated record if found, None otherwise
        """
        instance = await self.get_by_id(id)
        if not instance:
            return None

        try:
            for key, value in kwargs.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)

            if hasattr(instance, "updated_at"):
                setattr(instance, "updated_at", datetime.now(timezone.utc))

            await self.session.flush()
            await self.session.commit()
            return instance
        except SQLAlchemyError as e:
            await self._fail("updating", e)

    async def delete(self, id: Any) -> bool:
        """Delete a record by ID.

        Args:
            id: Primary key of the record to delete

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get_by_id(id)
        if not instance:
            return False

        try:
            await self.session.delete(instance)
            await self.session.flush()
            await self.session.commit()
            return True
        except SQLAlchemyError as e:
            await self._fail("deleting", e)
