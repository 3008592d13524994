"""
Entity store shared by the per-entity repositories.

A repository is bound to one session, which is the unit of work. Writes are
flushed immediately so that ids are assigned and storage constraints are
checked inside the call that caused them; committing is left to the caller.
Nothing here cascades: deleting a row that still has dependants fails with
ConstraintViolation.
"""
import logging
from contextlib import contextmanager
from datetime import timedelta
from typing import Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Query, Session

from blog.core.clock import Clock, clock as default_clock
from blog.core.exceptions import ConstraintViolation, NotFound, ValidationError
from blog.repositories.paging import Direction, Page, PageRequest


T = TypeVar("T")


class Repository(Generic[T]):
    model: Type[T]
    entity_name: str
    sortable: Tuple[str, ...] = ("id", "created_at", "updated_at")

    def __init__(self, db: Session, *, clock: Clock = default_clock):
        self._db = db
        self._clock = clock

    # Store operations

    def insert(self, entity: T) -> T:
        if entity.id is not None:
            raise ConstraintViolation(f"{self.entity_name} {entity.id} is already stored")

        now = self._clock()
        entity.created_at = now
        entity.updated_at = now
        self._db.add(entity)
        self._flush(entity)
        logging.debug(f"Inserted {entity!r}")
        return entity

    def update(self, entity: T) -> T:
        if entity.id is None or not self.exists(entity.id):
            raise NotFound(self.entity_name, entity.id)

        if entity not in self._db:
            entity = self._db.merge(entity)
        entity.updated_at = self._next_timestamp(entity.updated_at)
        self._flush(entity)
        logging.debug(f"Updated {entity!r}")
        return entity

    def delete(self, id: int) -> None:
        entity = self.get(id)
        self._db.delete(entity)
        self._flush(entity)
        logging.debug(f"Deleted {self.entity_name} {id}")

    def get(self, id: int) -> T:
        entity = self.find(id)
        if entity is None:
            raise NotFound(self.entity_name, id)
        return entity

    def find(self, id: int) -> Optional[T]:
        return self._db.get(self.model, id)

    def exists(self, id: int) -> bool:
        return self._db.query(self.model.id).filter(self.model.id == id).first() is not None

    def find_all(self) -> List[T]:
        return self._db.query(self.model).order_by(self.model.id).all()

    def count(self) -> int:
        return self._db.query(self.model).count()

    def find_all_paged(self, request: PageRequest) -> Page[T]:
        return self._paginate(self._db.query(self.model), request)

    # Helpers for subclasses

    def _next_timestamp(self, previous):
        now = self._clock()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def _paginate(self, query: Query, request: PageRequest) -> Page[T]:
        if request.sort not in self.sortable:
            raise ValidationError(
                f"cannot sort {self.entity_name} by {request.sort!r}; expected one of {', '.join(self.sortable)}")

        column = getattr(self.model, request.sort)
        order = column.asc() if request.direction == Direction.ASC else column.desc()

        total = query.order_by(None).count()
        items = (query.order_by(order, self.model.id.asc())
                 .offset(request.offset)
                 .limit(request.size)
                 .all())
        return Page.of(items, total, request)

    def _flush(self, entity=None) -> None:
        with self._storage_errors(entity):
            self._db.flush()

    @contextmanager
    def _storage_errors(self, entity=None):
        try:
            yield
        except IntegrityError as error:
            self._translate_integrity_error(entity, error)
            raise ConstraintViolation(f"{self.entity_name} violates a storage constraint: {error.orig}") from error
        except DataError as error:
            # Values the column cannot hold, e.g. strings over a VARCHAR limit on PostgreSQL
            raise ConstraintViolation(f"{self.entity_name} has a value the storage rejects: {error.orig}") from error

    def _translate_integrity_error(self, entity, error: IntegrityError) -> None:
        """Raise a more specific error for a failed flush, or return to fall back to ConstraintViolation."""
