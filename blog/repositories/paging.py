import dataclasses
import enum
import math
from typing import Generic, List, TypeVar

from blog.core.exceptions import ValidationError


T = TypeVar("T")


class Direction(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclasses.dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 10
    sort: str = "id"
    direction: Direction = Direction.ASC

    def __post_init__(self):
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 0:
            raise ValidationError(f"page index must be a non-negative integer, got {self.page!r}")
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size <= 0:
            raise ValidationError(f"page size must be a positive integer, got {self.size!r}")
        if not self.sort:
            raise ValidationError("sort field must not be empty")
        try:
            object.__setattr__(self, "direction", Direction(self.direction))
        except ValueError:
            raise ValidationError(f"sort direction must be 'asc' or 'desc', got {self.direction!r}") from None

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclasses.dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def of(cls, items: List[T], total_elements: int, request: PageRequest) -> "Page[T]":
        total_pages = math.ceil(total_elements / request.size)
        return cls(
            items=items,
            page=request.page,
            size=request.size,
            total_elements=total_elements,
            total_pages=total_pages,
            has_next=request.page + 1 < total_pages,
            has_previous=request.page > 0,
        )
