from typing import List

from sqlalchemy.orm import joinedload

from blog.models.comment import Comment
from blog.repositories.base import Repository


class CommentRepository(Repository[Comment]):
    model = Comment
    entity_name = "Comment"

    def find_by_post_id(self, post_id: int) -> List[Comment]:
        return self._db.query(Comment).filter(Comment.post_id == post_id).order_by(Comment.id).all()

    def find_by_user_id(self, user_id: int) -> List[Comment]:
        return self._db.query(Comment).filter(Comment.user_id == user_id).order_by(Comment.id).all()

    def find_by_post_id_order_by_created_at_asc(self, post_id: int) -> List[Comment]:
        return (self._db.query(Comment)
                .filter(Comment.post_id == post_id)
                .order_by(Comment.created_at.asc(), Comment.id.asc())
                .all())

    def count_by_post_id(self, post_id: int) -> int:
        return self._db.query(Comment).filter(Comment.post_id == post_id).count()

    def count_by_user_id(self, user_id: int) -> int:
        return self._db.query(Comment).filter(Comment.user_id == user_id).count()

    def find_with_user_and_post(self, post_id: int) -> List[Comment]:
        return (self._db.query(Comment)
                .options(joinedload(Comment.user), joinedload(Comment.post))
                .populate_existing()
                .filter(Comment.post_id == post_id)
                .order_by(Comment.created_at.asc(), Comment.id.asc())
                .all())

    def delete_by_post_ids(self, post_ids: List[int]) -> int:
        if not post_ids:
            return 0
        with self._storage_errors():
            return (self._db.query(Comment)
                    .filter(Comment.post_id.in_(post_ids))
                    .delete(synchronize_session="fetch"))

    def delete_by_user_id(self, user_id: int) -> int:
        with self._storage_errors():
            return (self._db.query(Comment)
                    .filter(Comment.user_id == user_id)
                    .delete(synchronize_session="fetch"))
