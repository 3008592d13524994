from pydantic import BaseModel, ConfigDict
from typing import Generic, List, TypeVar

T = TypeVar("T")


class ResponsePage(BaseModel, Generic[T]):
    items: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool
    has_previous: bool

    model_config = ConfigDict(from_attributes=True)
