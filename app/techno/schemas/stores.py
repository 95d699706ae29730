from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.techno.schemas.common import CamelModel


class StoreRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    store_name: str = Field(min_length=1, max_length=200)
    project_code: int = Field(gt=0)
    store_location: str | None = Field(default=None, max_length=500)
    store_manager_id: int | None = Field(default=None, gt=0)


class StoreSummary(CamelModel):
    store_code: int
    project_code: int
    project_name: str | None = None
    store_name: str
    store_location: str | None = None
    status: Literal["ACTIVE", "INACTIVE"]
    is_active: bool
    item_count: int = 0
    store_manager_id: int | None = None
    store_manager_name: str | None = None


class StoreResponse(StoreSummary):
    created_at: datetime
    created_by: str | None = None
    modified_at: datetime
    modified_by: str | None = None
