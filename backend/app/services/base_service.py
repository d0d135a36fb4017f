"""
Base CRUD Service
Reusable service pattern for document collections
"""

from typing import TypeVar, Generic, Optional, Type, Any
from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo import ReturnDocument
from pydantic import BaseModel

from app.models.common import utc_now

T = TypeVar("T", bound=BaseModel)


class BaseService(Generic[T]):
    """
    Base service with CRUD operations for MongoDB collections

    Provides:
    - Create, read, update, delete by a string id field
    - Partial updates that never overwrite with None
    - Atomic single-value array pushes
    - Ordered lookup of referenced documents
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        collection_name: str,
        model_class: Type[T],
        id_field: str
    ):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[collection_name]
        self.model_class = model_class
        self.id_field = id_field

    async def create(self, document: T) -> T:
        """
        Insert a new document

        Args:
            document: Model instance to persist

        Returns:
            The same instance
        """
        await self.collection.insert_one(document.to_document())
        return document

    async def get_by_id(self, doc_id: str) -> Optional[T]:
        """Get document by ID, None if absent"""
        return await self.find_one({self.id_field: doc_id})

    async def find_one(self, query: dict) -> Optional[T]:
        """Get the first document matching a query"""
        doc = await self.collection.find_one(query)
        return self.model_class(**doc) if doc else None

    async def get_many_by_ids(self, doc_ids: list[str]) -> list[T]:
        """
        Resolve a list of references

        Args:
            doc_ids: IDs in the order they should be returned

        Returns:
            Documents in ``doc_ids`` order; IDs that no longer resolve are skipped
        """
        if not doc_ids:
            return []

        cursor = self.collection.find({self.id_field: {"$in": doc_ids}})
        docs = await cursor.to_list(length=len(doc_ids))
        by_id = {doc[self.id_field]: doc for doc in docs}

        return [self.model_class(**by_id[doc_id]) for doc_id in doc_ids if doc_id in by_id]

    async def update(self, doc_id: str, data: dict) -> Optional[T]:
        """
        Update document by ID

        Args:
            doc_id: Document ID
            data: Fields to update

        Returns:
            Updated document or None if not found
        """
        # Remove None values to avoid overwriting with null
        update_data = {k: v for k, v in data.items() if v is not None}
        update_data["updated_at"] = utc_now()

        result = await self.collection.find_one_and_update(
            {self.id_field: doc_id},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER
        )

        return self.model_class(**result) if result else None

    async def push(self, query: dict, field: str, value: Any) -> Optional[T]:
        """
        Atomically append exactly one value to an array field

        Returns:
            Updated document or None if nothing matched
        """
        result = await self.collection.find_one_and_update(
            query,
            {"$push": {field: value}, "$set": {"updated_at": utc_now()}},
            return_document=ReturnDocument.AFTER
        )

        return self.model_class(**result) if result else None

    async def delete(self, doc_id: str) -> bool:
        """Hard delete document by ID, True if something was removed"""
        result = await self.collection.delete_one({self.id_field: doc_id})
        return result.deleted_count > 0
