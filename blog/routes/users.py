from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from blog.db.session import get_db
from blog.models.user import UserStatus
from blog.routes.paging import page_request
from blog.repositories.paging import PageRequest
from blog.schemas.page_schema import ResponsePage
from blog.schemas.post_schema import ResponsePost
from blog.schemas.user_schema import (
    EmailUpdate, ResponseUser, ResponseUserSummary, StatusUpdate, UserCreate, UserStats, UserUpdate,
)
from blog.services import post as post_service
from blog.services import user as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=ResponseUser, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    return user_service.create_user(
        db, username=user.username, email=user.email, age=user.age, phone_number=user.phone_number)


@router.get("/", response_model=ResponsePage[ResponseUser])
def list_users(
    keyword: Optional[str] = None,
    user_status: Optional[UserStatus] = Query(None, alias="status"),
    request: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    if keyword is not None:
        page = user_service.search_users_by_username_paged(db, keyword, request)
    elif user_status is not None:
        page = user_service.get_users_by_status_paged(db, user_status, request)
    else:
        page = user_service.get_users_paged(db, request)
    return ResponsePage[ResponseUser].model_validate(page)


@router.get("/summaries", response_model=List[ResponseUserSummary])
def user_summaries(db: Session = Depends(get_db)):
    return user_service.get_user_summaries(db)


@router.get("/stats", response_model=UserStats)
def user_stats(db: Session = Depends(get_db)):
    return UserStats(
        total=user_service.get_user_count(db),
        by_status=user_service.count_users_by_status(db),
        by_age=user_service.count_users_by_age(db),
    )


@router.get("/{user_id}", response_model=ResponseUser)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.get("/{user_id}/posts", response_model=ResponsePage[ResponsePost])
def get_user_posts(user_id: int, request: PageRequest = Depends(page_request), db: Session = Depends(get_db)):
    page = post_service.get_posts_by_author_paged(db, user_id, request)
    return ResponsePage[ResponsePost].model_validate(page)


@router.put("/{user_id}", response_model=ResponseUser)
def update_user(user_id: int, user_data: UserUpdate, db: Session = Depends(get_db)):
    return user_service.update_user(db, user_id, user_data.username, user_data.phone_number)


@router.put("/{user_id}/email", response_model=ResponseUser)
def update_email(user_id: int, email_data: EmailUpdate, db: Session = Depends(get_db)):
    return user_service.update_email(db, user_id, email_data.email)


@router.put("/{user_id}/status", response_model=ResponseUser)
def update_status(user_id: int, status_data: StatusUpdate, db: Session = Depends(get_db)):
    return user_service.update_user_status(db, user_id, status_data.status)


@router.post("/{user_id}/activate", response_model=ResponseUser)
def activate_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.activate_user(db, user_id)


@router.post("/{user_id}/deactivate", response_model=ResponseUser)
def deactivate_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.deactivate_user(db, user_id)


@router.post("/{user_id}/ban", response_model=ResponseUser)
def ban_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.ban_user(db, user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    user_service.delete_user(db, user_id)
