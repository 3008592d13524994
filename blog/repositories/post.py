from datetime import datetime
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import joinedload, selectinload

from blog.core.clock import as_stored
from blog.core.exceptions import NotFound
from blog.models.comment import Comment
from blog.models.post import Post
from blog.repositories.base import Repository
from blog.repositories.paging import Page, PageRequest


class PostRepository(Repository[Post]):
    model = Post
    entity_name = "Post"
    sortable = ("id", "title", "view_count", "published", "author_id", "created_at", "updated_at")

    def find_by_title_containing(self, keyword: str) -> List[Post]:
        return self._title_containing(keyword).order_by(Post.id).all()

    def find_by_title_containing_paged(self, keyword: str, request: PageRequest) -> Page[Post]:
        return self._paginate(self._title_containing(keyword), request)

    def _title_containing(self, keyword: str):
        return self._db.query(Post).filter(Post.title.icontains(keyword, autoescape=True))

    def search_by_title_or_content(self, keyword: str) -> List[Post]:
        return (self._db.query(Post)
                .filter(or_(Post.title.icontains(keyword, autoescape=True),
                            Post.content.icontains(keyword, autoescape=True)))
                .order_by(Post.id)
                .all())

    def find_by_author_id(self, author_id: int) -> List[Post]:
        return self._db.query(Post).filter(Post.author_id == author_id).order_by(Post.id).all()

    def find_by_author_id_paged(self, author_id: int, request: PageRequest) -> Page[Post]:
        return self._paginate(self._db.query(Post).filter(Post.author_id == author_id), request)

    def find_by_author_and_published(self, author_id: int, published: bool) -> List[Post]:
        return (self._db.query(Post)
                .filter(Post.author_id == author_id, Post.published == published)
                .order_by(Post.id)
                .all())

    def ids_by_author_id(self, author_id: int) -> List[int]:
        return [row.id for row in self._db.query(Post.id).filter(Post.author_id == author_id)]

    def find_by_published(self, published: bool) -> List[Post]:
        return self._db.query(Post).filter(Post.published == published).order_by(Post.id).all()

    def find_published_order_by_created_at_desc(self) -> List[Post]:
        return (self._db.query(Post)
                .filter(Post.published.is_(True))
                .order_by(Post.created_at.desc(), Post.id.desc())
                .all())

    def find_published_paged(self, request: PageRequest) -> Page[Post]:
        return self._paginate(self._db.query(Post).filter(Post.published.is_(True)), request)

    def find_by_created_at_between(self, start: datetime, end: datetime) -> List[Post]:
        return (self._db.query(Post)
                .filter(Post.created_at.between(as_stored(start), as_stored(end)))
                .order_by(Post.id)
                .all())

    def find_by_view_count_greater_than(self, view_count: int) -> List[Post]:
        return self._db.query(Post).filter(Post.view_count > view_count).order_by(Post.id).all()

    def count_by_author_id(self, author_id: int) -> int:
        return self._db.query(Post).filter(Post.author_id == author_id).count()

    def count_by_published(self, published: bool = True) -> int:
        return self._db.query(Post).filter(Post.published == published).count()

    # Eager lookups: relations come back loaded, in the same call

    def find_all_published_with_author(self) -> List[Post]:
        return (self._db.query(Post)
                .options(joinedload(Post.author))
                .populate_existing()
                .filter(Post.published.is_(True))
                .order_by(Post.id)
                .all())

    def get_with_comments_and_author(self, id: int) -> Post:
        post = (self._db.query(Post)
                .options(joinedload(Post.author),
                         selectinload(Post.comments).joinedload(Comment.user))
                .populate_existing()
                .filter(Post.id == id)
                .first())
        if post is None:
            raise NotFound(self.entity_name, id)
        return post

    def increment_view_count(self, id: int) -> int:
        """Add one to the stored view count in a single UPDATE; returns rows touched."""
        with self._storage_errors():
            return (self._db.query(Post)
                    .filter(Post.id == id)
                    .update({Post.view_count: Post.view_count + 1,
                             Post.updated_at: self._clock()},
                            synchronize_session="fetch"))

    def delete_by_ids(self, ids: List[int]) -> int:
        if not ids:
            return 0
        with self._storage_errors():
            return (self._db.query(Post)
                    .filter(Post.id.in_(ids))
                    .delete(synchronize_session="fetch"))
