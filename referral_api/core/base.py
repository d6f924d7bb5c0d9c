from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func


ModelType = TypeVar('ModelType')


class IRepository(ABC, Generic[ModelType]):
    """Append-only repository interface: records are created and read, never changed"""

    @abstractmethod
    async def create(self, *, obj_in: Dict[str, Any]) -> ModelType:
        """Create new entity"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count entities"""
        pass


class BaseRepository(IRepository[ModelType], Generic[ModelType]):
    """Base repository implementation with the common create/read operations"""

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def create(self, *, obj_in: Dict[str, Any]) -> ModelType:
        """Create new entity and load the columns the database filled in"""
        db_obj = self.model(**obj_in)
        self.session.add(db_obj)
        await self.session.flush()
        await self.session.refresh(db_obj)
        return db_obj

    async def count(self) -> int:
        """Count entities"""
        query = select(func.count()).select_from(self.model)
        result = await self.session.execute(query)
        return result.scalar() or 0


class BaseService:
    """Base service implementation with common dependencies"""

    def __init__(self, session: AsyncSession):
        self.session = session
