import dataclasses
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from blog.core.clock import as_stored
from blog.core.exceptions import DuplicateEmail, NotFound
from blog.models.user import User, UserStatus
from blog.repositories.base import Repository
from blog.repositories.paging import Page, PageRequest


@dataclasses.dataclass(frozen=True)
class UserSummary:
    id: int
    username: str
    email: str


class UserRepository(Repository[User]):
    model = User
    entity_name = "User"
    sortable = ("id", "username", "email", "age", "status", "created_at", "updated_at")

    def _translate_integrity_error(self, entity, error: IntegrityError) -> None:
        # sqlite: "UNIQUE constraint failed: users.email", postgres: "... ix_users_email ..."
        message = str(error.orig).lower()
        if "unique" in message or "duplicate" in message:
            if "email" in message and entity is not None:
                raise DuplicateEmail(entity.email) from error

    # Exact-match lookups

    def find_by_email(self, email: str) -> Optional[User]:
        return self._db.query(User).filter(User.email == email).first()

    def find_by_username_and_email(self, username: str, email: str) -> Optional[User]:
        return self._db.query(User).filter(User.username == username, User.email == email).first()

    def exists_by_email(self, email: str) -> bool:
        return self._db.query(User.id).filter(User.email == email).first() is not None

    def exists_by_username(self, username: str) -> bool:
        return self._db.query(User.id).filter(User.username == username).first() is not None

    # Searches (case-insensitive "containing")

    def find_by_username_containing(self, keyword: str) -> List[User]:
        return self._username_containing(keyword).order_by(User.id).all()

    def find_by_username_containing_paged(self, keyword: str, request: PageRequest) -> Page[User]:
        return self._paginate(self._username_containing(keyword), request)

    def _username_containing(self, keyword: str):
        return self._db.query(User).filter(User.username.icontains(keyword, autoescape=True))

    # Range lookups

    def find_by_age_between(self, min_age: int, max_age: int) -> List[User]:
        return self._db.query(User).filter(User.age.between(min_age, max_age)).order_by(User.id).all()

    def find_by_age_greater_than(self, age: int) -> List[User]:
        return self._db.query(User).filter(User.age > age).order_by(User.id).all()

    def find_by_age_less_than(self, age: int) -> List[User]:
        return self._db.query(User).filter(User.age < age).order_by(User.id).all()

    def find_by_created_at_after(self, date: datetime) -> List[User]:
        return self._db.query(User).filter(User.created_at > as_stored(date)).order_by(User.id).all()

    def find_by_created_at_before(self, date: datetime) -> List[User]:
        return self._db.query(User).filter(User.created_at < as_stored(date)).order_by(User.id).all()

    def find_by_created_at_between(self, start: datetime, end: datetime) -> List[User]:
        return (self._db.query(User)
                .filter(User.created_at.between(as_stored(start), as_stored(end)))
                .order_by(User.id)
                .all())

    def find_active_older_than(self, min_age: int, status: UserStatus) -> List[User]:
        return (self._db.query(User)
                .filter(User.age >= min_age, User.status == status)
                .order_by(User.id)
                .all())

    # Status

    def find_by_status(self, status: UserStatus) -> List[User]:
        return self._db.query(User).filter(User.status == status).order_by(User.id).all()

    def find_by_status_paged(self, status: UserStatus, request: PageRequest) -> Page[User]:
        return self._paginate(self._db.query(User).filter(User.status == status), request)

    def find_by_status_not(self, status: UserStatus) -> List[User]:
        return self._db.query(User).filter(User.status != status).order_by(User.id).all()

    def count_by_status(self, status: UserStatus) -> int:
        return self._db.query(User).filter(User.status == status).count()

    def ids_by_status(self, status: UserStatus) -> List[int]:
        return [row.id for row in self._db.query(User.id).filter(User.status == status).order_by(User.id)]

    # Ordered listings

    def find_all_order_by_username_desc(self) -> List[User]:
        return self._db.query(User).order_by(User.username.desc(), User.id).all()

    def find_all_order_by_created_at_desc(self) -> List[User]:
        return self._db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def find_by_status_order_by_created_at_desc(self, status: UserStatus) -> List[User]:
        return (self._db.query(User)
                .filter(User.status == status)
                .order_by(User.created_at.desc(), User.id.desc())
                .all())

    # Eager lookups

    def get_with_posts(self, id: int) -> User:
        user = (self._db.query(User)
                .options(selectinload(User.posts))
                .populate_existing()
                .filter(User.id == id)
                .first())
        if user is None:
            raise NotFound(self.entity_name, id)
        return user

    # Single-statement writes, each returning the number of rows touched

    def update_username(self, id: int, username: str) -> int:
        return self._update_columns(id, {User.username: username})

    def update_status(self, id: int, status: UserStatus) -> int:
        return self._update_columns(id, {User.status: status})

    def _update_columns(self, id: int, values) -> int:
        values = dict(values)
        values[User.updated_at] = self._clock()
        with self._storage_errors():
            return (self._db.query(User)
                    .filter(User.id == id)
                    .update(values, synchronize_session="fetch"))

    def delete_by_status(self, status: UserStatus) -> int:
        with self._storage_errors():
            return (self._db.query(User)
                    .filter(User.status == status)
                    .delete(synchronize_session="fetch"))

    # Aggregates and projections

    def count_users_by_age(self) -> Dict[int, int]:
        rows = (self._db.query(User.age, func.count(User.id))
                .group_by(User.age)
                .order_by(User.age)
                .all())
        return {age: count for age, count in rows}

    def count_users_by_status(self) -> Dict[UserStatus, int]:
        counts = {status: 0 for status in UserStatus}
        for status, count in self._db.query(User.status, func.count(User.id)).group_by(User.status):
            counts[UserStatus(status)] = count
        return counts

    def find_user_summaries(self) -> List[UserSummary]:
        rows = self._db.query(User.id, User.username, User.email).order_by(User.id).all()
        return [UserSummary(id=row.id, username=row.username, email=row.email) for row in rows]
