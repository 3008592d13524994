from fastapi import Query

from blog.config import settings
from blog.repositories.paging import Direction, PageRequest


def page_request(
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, gt=0, le=settings.MAX_PAGE_SIZE),
    sort: str = "id",
    direction: Direction = Direction.ASC,
) -> PageRequest:
    return PageRequest(page=page, size=size, sort=sort, direction=direction)
