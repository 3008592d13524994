import logging
from typing import List

from sqlalchemy.orm import Session

from blog.db.session import unit_of_work
from blog.models.comment import Comment
from blog.repositories.comment import CommentRepository
from blog.repositories.post import PostRepository
from blog.repositories.user import UserRepository


def add_comment(db: Session, post_id: int, user_id: int, content: str) -> Comment:
    logging.debug(f"User {user_id} commenting on post {post_id}")
    with unit_of_work(db):
        post = PostRepository(db).get(post_id)
        user = UserRepository(db).get(user_id)
        return CommentRepository(db).insert(Comment(content=content, post_id=post.id, user_id=user.id))


def get_comment(db: Session, comment_id: int) -> Comment:
    return CommentRepository(db).get(comment_id)


def get_comments_for_post(db: Session, post_id: int) -> List[Comment]:
    """Comments on a post, oldest first, with their authors and post loaded."""
    PostRepository(db).get(post_id)
    return CommentRepository(db).find_with_user_and_post(post_id)


def get_comments_by_user(db: Session, user_id: int) -> List[Comment]:
    return CommentRepository(db).find_by_user_id(user_id)


def update_comment(db: Session, comment_id: int, content: str) -> Comment:
    comments = CommentRepository(db)
    with unit_of_work(db):
        comment = comments.get(comment_id)
        comment.content = content
        return comments.update(comment)


def delete_comment(db: Session, comment_id: int) -> None:
    with unit_of_work(db):
        CommentRepository(db).delete(comment_id)
    logging.info(f"Deleted comment {comment_id}")


def get_comment_count_for_post(db: Session, post_id: int) -> int:
    return CommentRepository(db).count_by_post_id(post_id)


def get_comment_count_by_user(db: Session, user_id: int) -> int:
    return CommentRepository(db).count_by_user_id(user_id)
