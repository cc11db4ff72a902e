"""
Base CRUD with generic CRUD operations.

Provides reusable database operations that can be inherited by specific repositories.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseCRUD(Generic[ModelType]):
    """
    Generic repository providing common CRUD operations.

    Usage:
        class AirportCRUD(BaseCRUD[Airport]):
            model = Airport
            pk_field = "icao"
    """

    model: Type[ModelType] = None
    pk_field: str = "id"

    @classmethod
    def _pk(cls):
        return getattr(cls.model, cls.pk_field)

    @classmethod
    async def find_by_id(
        cls,
        db: AsyncSession,
        id_value: Any,
        *,
        fresh: bool = False
    ) -> Optional[ModelType]:
        """
        Find a single record by primary key.

        Args:
            db: Database session
            id_value: The primary key value to search for
            fresh: Overwrite any copy already in the identity map with the
                row as currently stored

        Returns:
            Model instance or None if not found
        """
        stmt = select(cls.model).where(cls._pk() == id_value)
        if fresh:
            stmt = stmt.execution_options(populate_existing=True)

        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @classmethod
    async def find_all(
        cls,
        db: AsyncSession,
        *,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Any] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[ModelType]:
        """
        Find all records matching filters.

        Args:
            db: Database session
            filters: Dictionary of field:value filters (None values are skipped)
            order_by: Column(s) to order by
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            List of model instances
        """
        stmt = select(cls.model)

        if filters:
            for field, value in filters.items():
                if value is not None:
                    stmt = stmt.where(getattr(cls.model, field) == value)

        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                stmt = stmt.order_by(*order_by)
            else:
                stmt = stmt.order_by(order_by)

        if offset:
            stmt = stmt.offset(offset)

        if limit:
            stmt = stmt.limit(limit)

        result = await db.execute(stmt)
        return list(result.scalars().all())

    @classmethod
    async def create(
        cls,
        db: AsyncSession,
        *,
        obj_in: Dict[str, Any],
        commit: bool = True
    ) -> ModelType:
        """
        Create a new record.

        Args:
            db: Database session
            obj_in: Dictionary of field values
            commit: Whether to commit immediately

        Returns:
            Created model instance
        """
        db_obj = cls.model(**obj_in)
        db.add(db_obj)

        if commit:
            await db.commit()
            await db.refresh(db_obj)
        else:
            await db.flush()

        return db_obj

    @classmethod
    async def exists(
        cls,
        db: AsyncSession,
        id_value: Any
    ) -> bool:
        """Check if a record with this primary key exists."""
        stmt = select(func.count()).select_from(cls.model).where(cls._pk() == id_value)
        result = await db.execute(stmt)
        return (result.scalar() or 0) > 0
