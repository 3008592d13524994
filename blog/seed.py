"""
Sample users, posts and comments for local development and tests.

Posts and comments refer to users and posts by their position in the lists
below (1-based), not by database id.
"""
import logging

from sqlalchemy.orm import Session

from blog.db.session import unit_of_work
from blog.models.comment import Comment
from blog.models.post import Post
from blog.models.user import User, UserStatus
from blog.repositories.comment import CommentRepository
from blog.repositories.post import PostRepository
from blog.repositories.user import UserRepository

USERS = [
    # username, email, phone_number, age, status
    ("Hong Gildong", "hong@example.com", "010-1234-5678", 25, UserStatus.ACTIVE),
    ("Kim Cheolsu", "kim@example.com", "010-2345-6789", 30, UserStatus.ACTIVE),
    ("Lee Younghee", "lee@example.com", "010-3456-7890", 28, UserStatus.ACTIVE),
    ("Park Minsu", "park@example.com", "010-4567-8901", 35, UserStatus.INACTIVE),
    ("Jung Sujin", "jung@example.com", "010-5678-9012", 27, UserStatus.ACTIVE),
]

POSTS = [
    # title, content, view_count, published, author
    ("Getting started with SQLAlchemy", "SQLAlchemy makes the data access layer easy to build.", 150, True, 1),
    ("Entity design patterns", "Things to consider when designing entities.", 230, True, 1),
    ("Understanding the repository pattern", "A repository abstracts over the data source.", 180, True, 2),
    ("Writing query methods", "Building queries from small, named lookups.", 95, True, 2),
    ("Solving the N+1 problem", "Why N+1 queries happen and how eager loading avoids them.", 320, True, 3),
    ("Draft", "Still writing this one.", 5, False, 3),
]

COMMENTS = [
    # content, post, author
    ("Thanks for the great post!", 1, 2),
    ("This helped a lot.", 1, 3),
    ("Can I ask a question in the comments?", 2, 4),
    ("Of course! Ask anything.", 2, 1),
    ("The list of entity design pitfalls was useful.", 2, 5),
    ("First time seeing the repository pattern and it made sense.", 3, 1),
    ("Some example code would make it even better.", 4, 3),
    ("Clear explanation of how to fix N+1.", 5, 2),
    ("The comparison of eager loading strategies stood out.", 5, 4),
]


def seed_database(db: Session) -> bool:
    """Insert the sample data unless users already exist. Returns whether anything was inserted."""
    users = UserRepository(db)
    if users.count() > 0:
        logging.info("Database already has users, skipping seed data")
        return False

    posts = PostRepository(db)
    comments = CommentRepository(db)

    with unit_of_work(db):
        user_ids = []
        for username, email, phone_number, age, status in USERS:
            user = User(username=username, email=email, age=age, phone_number=phone_number)
            user.status = status
            user_ids.append(users.insert(user).id)

        post_ids = []
        for title, content, view_count, published, author in POSTS:
            post = Post(title=title, content=content, author_id=user_ids[author - 1])
            post.view_count = view_count
            post.published = published
            post_ids.append(posts.insert(post).id)

        for content, post, author in COMMENTS:
            comments.insert(Comment(content=content, post_id=post_ids[post - 1], user_id=user_ids[author - 1]))

    logging.info(f"Seeded {len(USERS)} users, {len(POSTS)} posts and {len(COMMENTS)} comments")
    return True


if __name__ == "__main__":
    from blog.db.session import Base, SessionLocal, engine
    import blog.models  # noqa: F401

    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_database(session)
    finally:
        session.close()
