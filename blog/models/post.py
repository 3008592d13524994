from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from blog.db.session import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), index=True, nullable=False)
    content = Column(Text, nullable=True)
    view_count = Column(Integer, nullable=False, default=0)
    published = Column(Boolean, nullable=False, default=False)
    author_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    author = relationship("User", viewonly=True, lazy="raise")
    comments = relationship("Comment",
                            viewonly=True, lazy="raise", order_by="Comment.id")

    def __init__(self, title: str, content: str | None, author_id: int):
        self.title = title
        self.content = content
        self.author_id = author_id
        self.view_count = 0
        self.published = False

    def update_content(self, title: str, content: str | None):
        self.title = title
        self.content = content

    def publish(self):
        self.published = True

    def unpublish(self):
        self.published = False

    def __repr__(self):
        return (f"Post(id={self.id!r}, title={self.title!r}, view_count={self.view_count!r}, "
                f"published={self.published!r})")
