import logging
import sys

from sqlalchemy.orm import Session

from blog.db.session import engine as default_engine, Base
from blog.models import Comment, Post, User  # noqa: F401  registers the tables on Base.metadata
from blog.seed import seed_database


def run_migrations(engine=default_engine, seed: bool = False) -> None:
    logging.info(f"Creating tables: {', '.join(Base.metadata.tables)}")
    Base.metadata.create_all(bind=engine)
    if seed:
        with Session(engine, autoflush=False, expire_on_commit=False) as db:
            seed_database(db)
    logging.info("Migrations completed successfully.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_migrations(seed="--seed" in sys.argv[1:])
