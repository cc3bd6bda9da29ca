from devconnector.models.user import User
from devconnector.models.profile import Profile, Education
from devconnector.models.post import Post, Like, Comment

__all__ = ["User", "Profile", "Education", "Post", "Like", "Comment"]
