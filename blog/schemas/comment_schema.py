from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

from blog.schemas.user_schema import ResponseUser


class CommentBase(BaseModel):
    content: str = Field(..., min_length=1)


class CommentCreate(CommentBase):
    user_id: int


class CommentUpdate(CommentBase):
    pass


class ResponseComment(CommentBase):
    id: int
    post_id: int
    user_id: int
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class ResponseCommentWithAuthor(ResponseComment):
    user: ResponseUser
