from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from bson import ObjectId
from bson.errors import InvalidId
from beanie import Document
from pydantic import BaseModel

from clouddrive.core.protocols import SortSpec

ModelT = TypeVar("ModelT", bound=Document)
CreateSchemaT = TypeVar("CreateSchemaT", bound=BaseModel)
UpdateSchemaT = TypeVar("UpdateSchemaT", bound=BaseModel)


class BaseCRUD(Generic[ModelT, CreateSchemaT, UpdateSchemaT]):
    """Beanie-backed document store for one collection"""

    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def get_by_id(self, id: str) -> Optional[ModelT]:
        try:
            object_id = ObjectId(id)
        except (InvalidId, TypeError):
            return None
        return await self.model.find_one({"_id": object_id})

    async def find(
        self,
        filter_: Optional[Dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        cursor = self.model.find(dict(filter_ or {}))
        if sort:
            cursor = cursor.sort(list(sort))
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list()

    async def create(self, obj_in: CreateSchemaT | Dict[str, Any]) -> ModelT:
        data = obj_in.model_dump() if isinstance(obj_in, BaseModel) else dict(obj_in)
        db_obj = self.model(**data)
        await db_obj.insert()
        return db_obj

    async def update(
        self,
        id: str,
        obj_in: UpdateSchemaT | Dict[str, Any],
    ) -> Optional[ModelT]:
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return None

        if isinstance(obj_in, BaseModel):
            update_data = obj_in.model_dump(exclude_unset=True)
        else:
            # None is a meaningful value here (e.g. moving to root)
            update_data = dict(obj_in)

        if "updated_at" in self.model.model_fields:
            update_data["updated_at"] = db_obj.touch()

        await db_obj.set(update_data)
        return db_obj

    async def delete(self, id: str) -> bool:
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return False
        await db_obj.delete()
        return True
