from blog.models.user import User, UserStatus
from blog.models.post import Post
from blog.models.comment import Comment
