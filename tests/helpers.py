"""Shared test harness: the real app over in-memory SQLite and a temporary upload directory."""

import tempfile
import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from blog_api.api.deps import get_media_store
from blog_api.core.database import get_db
from blog_api.main import app
from blog_api.models import Base, Post, User
from blog_api.services.media import MediaStore

DEFAULT_PASSWORD = "secret123"


class ApiTestCase(unittest.TestCase):
    """Base class wiring a TestClient to an isolated database and media directory."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.media = MediaStore(tmp.name)

        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.addCleanup(engine.dispose)
        self.SessionTesting = sessionmaker(bind=engine, autocommit=False, autoflush=False)

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_media_store] = lambda: self.media
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    # --- request helpers ---

    def register(
        self,
        name: str = "Alice",
        email: str = "alice@example.com",
        password: str = DEFAULT_PASSWORD,
        password2: str | None = None,
    ):
        return self.client.post(
            "/api/users/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "password2": password if password2 is None else password2,
            },
        )

    def login(self, email: str = "alice@example.com", password: str = DEFAULT_PASSWORD):
        return self.client.post("/api/users/login", json={"email": email, "password": password})

    def signup_and_login(
        self, name: str = "Alice", email: str = "alice@example.com"
    ) -> tuple[str, dict[str, str]]:
        """Register and log in; return (user id, auth headers)."""
        self.assertEqual(self.register(name=name, email=email).status_code, 201)
        resp = self.login(email=email)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        return body["id"], {"Authorization": f"Bearer {body['token']}"}

    def create_post(
        self,
        headers: dict[str, str],
        title: str = "First post",
        category: str = "Art",
        description: str = "A description long enough.",
        thumbnail_size: int = 1024,
        thumbnail_name: str = "cover.png",
    ):
        files = {"thumbnail": (thumbnail_name, b"\x89" * thumbnail_size, "image/png")}
        data = {"title": title, "category": category, "description": description}
        return self.client.post("/api/posts", data=data, files=files, headers=headers)

    # --- database helpers ---

    def fetch_user(self, user_id: str) -> User | None:
        with self.SessionTesting() as db:
            return db.get(User, user_id)

    def fetch_post(self, post_id: str) -> Post | None:
        with self.SessionTesting() as db:
            return db.get(Post, post_id)

    def remove_user(self, user_id: str) -> None:
        """Delete a user row directly, leaving their tokens and posts behind."""
        with self.SessionTesting() as db:
            db.query(User).filter(User.id == user_id).delete()
            db.commit()

    def count_posts(self) -> int:
        with self.SessionTesting() as db:
            return db.query(Post).count()

    def count_users(self) -> int:
        with self.SessionTesting() as db:
            return db.query(User).count()
