import logging
from datetime import datetime
from typing import Dict, List

from sqlalchemy.orm import Session

from blog.core.exceptions import DuplicateEmail, NotFound, ValidationError
from blog.db.session import unit_of_work
from blog.models.user import User, UserStatus
from blog.repositories.comment import CommentRepository
from blog.repositories.paging import Page, PageRequest
from blog.repositories.post import PostRepository
from blog.repositories.user import UserRepository, UserSummary


def create_user(db: Session, username: str, email: str, age: int, phone_number: str | None = None) -> User:
    logging.debug(f"Creating user: {username} <{email}>")
    users = UserRepository(db)
    with unit_of_work(db):
        # The unique index on users.email still backs this check under concurrent inserts
        if users.exists_by_email(email):
            raise DuplicateEmail(email)
        return users.insert(User(username=username, email=email, age=age, phone_number=phone_number))


def get_user(db: Session, user_id: int) -> User:
    return UserRepository(db).get(user_id)


def get_user_by_email(db: Session, email: str) -> User:
    user = UserRepository(db).find_by_email(email)
    if user is None:
        raise NotFound("User", email)
    return user


def get_user_with_posts(db: Session, user_id: int) -> User:
    return UserRepository(db).get_with_posts(user_id)


def get_all_users(db: Session) -> List[User]:
    return UserRepository(db).find_all()


def get_users_paged(db: Session, request: PageRequest) -> Page[User]:
    return UserRepository(db).find_all_paged(request)


def search_users_by_username(db: Session, keyword: str) -> List[User]:
    return UserRepository(db).find_by_username_containing(keyword)


def search_users_by_username_paged(db: Session, keyword: str, request: PageRequest) -> Page[User]:
    return UserRepository(db).find_by_username_containing_paged(keyword, request)


def get_users_by_status(db: Session, status: UserStatus) -> List[User]:
    return UserRepository(db).find_by_status(status)


def get_users_by_status_paged(db: Session, status: UserStatus, request: PageRequest) -> Page[User]:
    return UserRepository(db).find_by_status_paged(status, request)


def get_active_users(db: Session) -> List[User]:
    return UserRepository(db).find_by_status(UserStatus.ACTIVE)


def get_users_by_age_range(db: Session, min_age: int, max_age: int) -> List[User]:
    return UserRepository(db).find_by_age_between(min_age, max_age)


def get_recent_users(db: Session) -> List[User]:
    return UserRepository(db).find_all_order_by_created_at_desc()


def get_users_joined_after(db: Session, date: datetime) -> List[User]:
    return UserRepository(db).find_by_created_at_after(date)


def update_user(db: Session, user_id: int, username: str, phone_number: str | None) -> User:
    logging.debug(f"Updating profile of user {user_id}")
    users = UserRepository(db)
    with unit_of_work(db):
        user = users.get(user_id)
        user.update_profile(username, phone_number)
        return users.update(user)


def update_email(db: Session, user_id: int, new_email: str) -> User:
    logging.debug(f"Updating email of user {user_id}")
    users = UserRepository(db)
    with unit_of_work(db):
        user = users.get(user_id)
        if user.email == new_email:
            return user

        if users.exists_by_email(new_email):
            raise DuplicateEmail(new_email)
        user.email = new_email
        return users.update(user)


def update_user_status(db: Session, user_id: int, status: UserStatus) -> User:
    # Any status may follow any other; there is no transition guard
    try:
        status = UserStatus(status)
    except ValueError:
        raise ValidationError(f"unknown user status: {status!r}") from None

    def change(user: User):
        user.status = status

    return _change_status(db, user_id, change)


def activate_user(db: Session, user_id: int) -> User:
    return _change_status(db, user_id, User.activate)


def deactivate_user(db: Session, user_id: int) -> User:
    return _change_status(db, user_id, User.deactivate)


def ban_user(db: Session, user_id: int) -> User:
    return _change_status(db, user_id, User.ban)


def _change_status(db: Session, user_id: int, change) -> User:
    users = UserRepository(db)
    with unit_of_work(db):
        user = users.get(user_id)
        change(user)
        logging.debug(f"Status of user {user_id} is now {user.status.value}")
        return users.update(user)


def delete_user(db: Session, user_id: int) -> None:
    users = UserRepository(db)
    with unit_of_work(db):
        users.get(user_id)
        _delete_with_dependants(db, user_id)


def delete_users_by_status(db: Session, status: UserStatus) -> int:
    users = UserRepository(db)
    with unit_of_work(db):
        user_ids = users.ids_by_status(status)
        for user_id in user_ids:
            _delete_dependants(db, user_id)
        deleted = users.delete_by_status(status)
    logging.info(f"Deleted {deleted} users with status {status}")
    return deleted


def _delete_with_dependants(db: Session, user_id: int) -> None:
    _delete_dependants(db, user_id)
    UserRepository(db).delete(user_id)
    logging.info(f"Deleted user {user_id}")


def _delete_dependants(db: Session, user_id: int) -> None:
    """
    Remove everything that references the user: comments on the user's posts,
    the posts themselves, then comments the user left on other posts.
    """
    posts = PostRepository(db)
    comments = CommentRepository(db)

    post_ids = posts.ids_by_author_id(user_id)
    removed_on_posts = comments.delete_by_post_ids(post_ids)
    removed_posts = posts.delete_by_ids(post_ids)
    removed_by_user = comments.delete_by_user_id(user_id)
    logging.debug(
        f"Cascade for user {user_id}: {removed_posts} posts, "
        f"{removed_on_posts + removed_by_user} comments")


# Read-only aggregates

def get_user_count(db: Session) -> int:
    return UserRepository(db).count()


def get_user_count_by_status(db: Session, status: UserStatus) -> int:
    return UserRepository(db).count_by_status(status)


def get_active_user_count(db: Session) -> int:
    return UserRepository(db).count_by_status(UserStatus.ACTIVE)


def count_users_by_age(db: Session) -> Dict[int, int]:
    return UserRepository(db).count_users_by_age()


def count_users_by_status(db: Session) -> Dict[UserStatus, int]:
    return UserRepository(db).count_users_by_status()


def get_user_summaries(db: Session) -> List[UserSummary]:
    return UserRepository(db).find_user_summaries()
