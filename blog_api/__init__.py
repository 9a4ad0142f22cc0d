"""Blog API: users, posts and media uploads over FastAPI."""
