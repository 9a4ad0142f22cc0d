"""Use-case services: users, posts, media lifecycle and cleanup."""
