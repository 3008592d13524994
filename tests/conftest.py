import pytest
from sqlalchemy.orm import Session

from blog.db.session import Base, build_engine
import blog.models  # noqa: F401
from blog.services import post as post_service
from blog.services import user as user_service


@pytest.fixture(name="engine")
def _fixture_engine():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def _fixture_session(engine):
    session = Session(engine, autoflush=False, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture(name="author")
def _fixture_author(session):
    return user_service.create_user(session, "<author>", "author@example.com", 30)


@pytest.fixture(name="post")
def _fixture_post(session, author):
    return post_service.create_post(session, author.id, "<title>", "<content>")
