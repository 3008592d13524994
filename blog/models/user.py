import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship
from blog.db.session import Base


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    BANNED = "BANNED"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    phone_number = Column(String(20), nullable=True)
    age = Column(Integer, nullable=False)
    status = Column(Enum(UserStatus, native_enum=False, length=20),
                    nullable=False, default=UserStatus.ACTIVE)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    # Read path only: filled by eager lookups, never loaded on access
    posts = relationship("Post",
                         viewonly=True, lazy="raise", order_by="Post.id")

    def __init__(self, username: str, email: str, age: int, phone_number: str | None = None):
        self.username = username
        self.email = email
        self.age = age
        self.phone_number = phone_number
        self.status = UserStatus.ACTIVE

    def update_profile(self, username: str, phone_number: str | None):
        self.username = username
        self.phone_number = phone_number

    def activate(self):
        self.status = UserStatus.ACTIVE

    def deactivate(self):
        self.status = UserStatus.INACTIVE

    def ban(self):
        self.status = UserStatus.BANNED

    def __repr__(self):
        return f"User(id={self.id!r}, username={self.username!r}, email={self.email!r}, status={self.status!r})"
