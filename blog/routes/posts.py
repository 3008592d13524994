from datetime import datetime
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from blog.db.session import get_db
from blog.repositories.paging import PageRequest
from blog.routes.paging import page_request
from blog.schemas.comment_schema import CommentCreate, ResponseComment, ResponseCommentWithAuthor
from blog.schemas.page_schema import ResponsePage
from blog.schemas.post_schema import PostCreate, PostUpdate, ResponsePost, ResponsePostDetail, ResponsePostWithAuthor
from blog.services import comment as comment_service
from blog.services import post as post_service

router = APIRouter(prefix="/posts", tags=["posts"])

# Create a new post

@router.post("/", response_model=ResponsePost, status_code=status.HTTP_201_CREATED)
def create_post(post: PostCreate, db: Session = Depends(get_db)):
    return post_service.create_post(db, post.author_id, post.title, post.content)

# List posts, optionally only published ones or matching a keyword

@router.get("/", response_model=ResponsePage[ResponsePost])
def list_posts(
    keyword: Optional[str] = None,
    published: bool = False,
    request: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    if keyword is not None:
        page = post_service.search_posts_by_title_paged(db, keyword, request)
    elif published:
        page = post_service.get_published_posts_paged(db, request)
    else:
        page = post_service.get_posts_paged(db, request)
    return ResponsePage[ResponsePost].model_validate(page)


@router.get("/published", response_model=List[ResponsePostWithAuthor])
def list_published_posts(db: Session = Depends(get_db)):
    return post_service.get_published_posts_with_author(db)


@router.get("/search", response_model=List[ResponsePost])
def search_posts(keyword: str, db: Session = Depends(get_db)):
    return post_service.search_posts(db, keyword)


@router.get("/popular", response_model=List[ResponsePost])
def popular_posts(min_view_count: int = 100, db: Session = Depends(get_db)):
    return post_service.get_popular_posts(db, min_view_count)


@router.get("/period", response_model=List[ResponsePost])
def posts_by_period(start: datetime, end: datetime, db: Session = Depends(get_db)):
    return post_service.get_posts_by_period(db, start, end)

# Get a post by id; counts as a view

@router.get("/{post_id}", response_model=ResponsePost)
def get_post(post_id: int, db: Session = Depends(get_db)):
    return post_service.get_post(db, post_id)

# Post with author and comments, not counted as a view

@router.get("/{post_id}/detail", response_model=ResponsePostDetail)
def get_post_detail(post_id: int, db: Session = Depends(get_db)):
    return post_service.get_post_with_comments(db, post_id)

# Update

@router.put("/{post_id}", response_model=ResponsePost)
def update_post(post_id: int, post_data: PostUpdate, db: Session = Depends(get_db)):
    return post_service.update_post(db, post_id, post_data.title, post_data.content)

# Publish / unpublish

@router.post("/{post_id}/publish", response_model=ResponsePost)
def publish_post(post_id: int, db: Session = Depends(get_db)):
    return post_service.publish_post(db, post_id)


@router.post("/{post_id}/unpublish", response_model=ResponsePost)
def unpublish_post(post_id: int, db: Session = Depends(get_db)):
    return post_service.unpublish_post(db, post_id)

# Delete, together with the post's comments

@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(post_id: int, db: Session = Depends(get_db)):
    post_service.delete_post(db, post_id)

# Comments

@router.post("/{post_id}/comments", response_model=ResponseComment, status_code=status.HTTP_201_CREATED)
def add_comment(post_id: int, comment: CommentCreate, db: Session = Depends(get_db)):
    return comment_service.add_comment(db, post_id, comment.user_id, comment.content)


@router.get("/{post_id}/comments", response_model=List[ResponseCommentWithAuthor])
def list_comments(post_id: int, db: Session = Depends(get_db)):
    return comment_service.get_comments_for_post(db, post_id)
