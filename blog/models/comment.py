from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from blog.db.session import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    post = relationship("Post", viewonly=True, lazy="raise")
    user = relationship("User", viewonly=True, lazy="raise")

    def __init__(self, content: str, post_id: int, user_id: int):
        self.content = content
        self.post_id = post_id
        self.user_id = user_id

    def __repr__(self):
        return f"Comment(id={self.id!r}, post_id={self.post_id!r}, user_id={self.user_id!r})"
