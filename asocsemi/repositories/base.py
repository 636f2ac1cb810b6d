"""
Base repository with generic record operations against one collection.

All collection-specific repositories inherit from this.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from asocsemi.core.backend import BackendResult, DataBackend
from asocsemi.core.exceptions import BackendException, BackendNotConfiguredException
from asocsemi.schemas.base import BaseSchema

# Generic type for row schemas
SchemaType = TypeVar("SchemaType", bound=BaseSchema)


class BaseRepository(Generic[SchemaType]):
    """
    Base repository providing insert/select/update on a named collection.

    Usage:
        class ContactRepository(BaseRepository[Contact]):
            def __init__(self):
                super().__init__("contacts", Contact)
    """

    def __init__(self, collection: str, schema: Type[SchemaType]):
        self.collection = collection
        self.schema = schema

    @staticmethod
    def _unwrap(backend: DataBackend, result: BackendResult) -> Any:
        """Return result.data, or raise the matching API exception."""
        if result.success:
            return result.data
        if not backend.configured:
            raise BackendNotConfiguredException(result.error)
        raise BackendException(result.error)

    async def create(
        self,
        backend: DataBackend,
        record: Dict[str, Any],
        *,
        access_token: Optional[str] = None,
    ) -> SchemaType:
        """Insert a row; id and created_at come back from the store."""
        result = await backend.insert(self.collection, record, access_token=access_token)
        return self.schema.model_validate(self._unwrap(backend, result))

    async def get_many(
        self,
        backend: DataBackend,
        *,
        access_token: Optional[str] = None,
    ) -> List[SchemaType]:
        """Get every row, newest first."""
        result = await backend.select(self.collection, access_token=access_token)
        rows = self._unwrap(backend, result) or []
        return [self.schema.model_validate(row) for row in rows]

    async def update(
        self,
        backend: DataBackend,
        id: str,
        *,
        access_token: Optional[str] = None,
        **patch: Any,
    ) -> List[SchemaType]:
        """Patch the row with this id. Returns the rows the store reports as updated."""
        result = await backend.update(self.collection, id, patch, access_token=access_token)
        rows = self._unwrap(backend, result) or []
        return [self.schema.model_validate(row) for row in rows]
