"""Social content backend: users, posts, comments, likes and ratings."""

__version__ = "1.0.0"
