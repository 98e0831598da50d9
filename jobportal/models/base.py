# jobportal/models/base.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentModel(BaseModel):
    """Stored document. The store is schema-less, so unknown fields are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    # legacy driver-style identifier, always equal to `id`
    mongo_id: Optional[str] = Field(default=None, alias="_id")
    updated_at: datetime

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class CreateModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class UpdateModel(BaseModel):
    """Partial update: only fields the caller actually set are written."""

    model_config = ConfigDict(extra="allow")

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)
