from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional

from blog.schemas.comment_schema import ResponseCommentWithAuthor
from blog.schemas.user_schema import ResponseUser


class PostBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None


class PostCreate(PostBase):
    author_id: int


class PostUpdate(PostBase):
    pass


class ResponsePost(PostBase):
    id: int
    author_id: int
    view_count: int
    published: bool
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class ResponsePostWithAuthor(ResponsePost):
    author: ResponseUser


# Eager post: author and comments (with their authors) loaded together
class ResponsePostDetail(ResponsePostWithAuthor):
    comments: List[ResponseCommentWithAuthor] = []
