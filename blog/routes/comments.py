from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog.db.session import get_db
from blog.schemas.comment_schema import CommentUpdate, ResponseComment
from blog.services import comment as comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{comment_id}", response_model=ResponseComment)
def get_comment(comment_id: int, db: Session = Depends(get_db)):
    return comment_service.get_comment(db, comment_id)


@router.put("/{comment_id}", response_model=ResponseComment)
def update_comment(comment_id: int, comment_data: CommentUpdate, db: Session = Depends(get_db)):
    return comment_service.update_comment(db, comment_id, comment_data.content)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(comment_id: int, db: Session = Depends(get_db)):
    comment_service.delete_comment(db, comment_id)
