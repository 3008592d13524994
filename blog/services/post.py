import logging
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from blog.db.session import unit_of_work
from blog.models.post import Post
from blog.repositories.comment import CommentRepository
from blog.repositories.paging import Page, PageRequest
from blog.repositories.post import PostRepository
from blog.repositories.user import UserRepository


def create_post(db: Session, author_id: int, title: str, content: str | None) -> Post:
    logging.debug(f"Creating post {title!r} for user {author_id}")
    with unit_of_work(db):
        author = UserRepository(db).get(author_id)
        return PostRepository(db).insert(Post(title=title, content=content, author_id=author.id))


def get_post(db: Session, post_id: int) -> Post:
    """Fetch a post and count the fetch as a view."""
    posts = PostRepository(db)
    with unit_of_work(db):
        post = posts.get(post_id)
        posts.increment_view_count(post_id)
        db.refresh(post, attribute_names=["view_count", "updated_at"])
        return post


def get_post_without_view(db: Session, post_id: int) -> Post:
    return PostRepository(db).get(post_id)


def get_post_with_comments(db: Session, post_id: int) -> Post:
    return PostRepository(db).get_with_comments_and_author(post_id)


def get_all_posts(db: Session) -> List[Post]:
    return PostRepository(db).find_all()


def get_posts_paged(db: Session, request: PageRequest) -> Page[Post]:
    return PostRepository(db).find_all_paged(request)


def get_published_posts(db: Session) -> List[Post]:
    return PostRepository(db).find_published_order_by_created_at_desc()


def get_published_posts_paged(db: Session, request: PageRequest) -> Page[Post]:
    return PostRepository(db).find_published_paged(request)


def get_published_posts_with_author(db: Session) -> List[Post]:
    return PostRepository(db).find_all_published_with_author()


def search_posts_by_title(db: Session, keyword: str) -> List[Post]:
    return PostRepository(db).find_by_title_containing(keyword)


def search_posts_by_title_paged(db: Session, keyword: str, request: PageRequest) -> Page[Post]:
    return PostRepository(db).find_by_title_containing_paged(keyword, request)


def search_posts(db: Session, keyword: str) -> List[Post]:
    return PostRepository(db).search_by_title_or_content(keyword)


def get_posts_by_author(db: Session, author_id: int) -> List[Post]:
    return PostRepository(db).find_by_author_id(author_id)


def get_posts_by_author_paged(db: Session, author_id: int, request: PageRequest) -> Page[Post]:
    UserRepository(db).get(author_id)
    return PostRepository(db).find_by_author_id_paged(author_id, request)


def update_post(db: Session, post_id: int, title: str, content: str | None) -> Post:
    logging.debug(f"Updating post {post_id}")
    posts = PostRepository(db)
    with unit_of_work(db):
        post = posts.get(post_id)
        post.update_content(title, content)
        return posts.update(post)


def publish_post(db: Session, post_id: int) -> Post:
    return _set_published(db, post_id, True)


def unpublish_post(db: Session, post_id: int) -> Post:
    return _set_published(db, post_id, False)


def _set_published(db: Session, post_id: int, published: bool) -> Post:
    posts = PostRepository(db)
    with unit_of_work(db):
        post = posts.get(post_id)
        if post.published == published:
            return post

        if published:
            post.publish()
        else:
            post.unpublish()
        logging.debug(f"Post {post_id} published={published}")
        return posts.update(post)


def delete_post(db: Session, post_id: int) -> None:
    posts = PostRepository(db)
    with unit_of_work(db):
        posts.get(post_id)
        removed = CommentRepository(db).delete_by_post_ids([post_id])
        posts.delete(post_id)
    logging.info(f"Deleted post {post_id} and {removed} comments")


# Read-only aggregates

def get_popular_posts(db: Session, min_view_count: int) -> List[Post]:
    return PostRepository(db).find_by_view_count_greater_than(min_view_count)


def get_posts_by_period(db: Session, start: datetime, end: datetime) -> List[Post]:
    return PostRepository(db).find_by_created_at_between(start, end)


def get_post_count_by_author(db: Session, author_id: int) -> int:
    return PostRepository(db).count_by_author_id(author_id)


def get_published_post_count(db: Session) -> int:
    return PostRepository(db).count_by_published(True)


def get_total_post_count(db: Session) -> int:
    return PostRepository(db).count()
