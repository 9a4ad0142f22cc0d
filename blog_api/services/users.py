"""User use cases: registration, login, profile and avatar changes, author listing."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog_api.core.errors import AppError, Conflict, NotFound, Unauthorized, ValidationFailed
from blog_api.core.security import (
    PASSWORD_MIN_LEN,
    TokenService,
    hash_password,
    verify_password,
)
from blog_api.models import User
from blog_api.schemas.users import (
    EditUserRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from blog_api.services.media import MediaStore, MediaUpload

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


def _find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def list_authors(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at).all()


def register_user(db: Session, body: RegisterRequest) -> User:
    """
    Create a user after checking the email is free, the passwords match and
    the password is long enough. The email is stored lowercase.
    """
    name = body.name.strip()
    email = body.email.strip().lower()
    if not name or not email or not body.password or not body.password2:
        raise ValidationFailed("Fill in all fields.")

    if _find_by_email(db, email) is not None:
        raise Conflict("Email already exists")
    if body.password != body.password2:
        raise ValidationFailed("Passwords do not match")
    if len(body.password.strip()) < PASSWORD_MIN_LEN:
        raise ValidationFailed(f"Password should be at least {PASSWORD_MIN_LEN} characters")

    user = User(name=name, email=email, password_hash=hash_password(body.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise Conflict("Email already exists") from e
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def login_user(db: Session, body: LoginRequest, tokens: TokenService) -> LoginResponse:
    """Issue a token for valid credentials. Unknown email and wrong password fail identically."""
    user = _find_by_email(db, body.email.strip().lower())
    if user is None or not verify_password(body.password, user.password_hash):
        raise Unauthorized(INVALID_CREDENTIALS)
    token = tokens.issue(user.id, user.name)
    return LoginResponse(token=token, id=user.id, name=user.name)


def change_avatar(
    db: Session,
    media: MediaStore,
    user_id: str,
    upload: MediaUpload | None,
    max_size: int,
) -> User:
    """
    Replace the caller's avatar. The size limit is checked before the record or
    the old file is touched; the new file is discarded if saving the record fails.
    """
    if upload is None or not upload.filename:
        raise ValidationFailed("Please choose an image")
    user = get_user(db, user_id)
    if upload.size > max_size:
        raise ValidationFailed(
            f"Profile picture is too large. Please use an image less than {max_size} bytes"
        )

    new_filename = media.replace(user.avatar, upload, max_size)
    try:
        user.avatar = new_filename
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Saving avatar for user %s failed: %s", user_id, e)
        media.discard_quietly(new_filename)
        raise AppError("Avatar update failed") from e
    db.refresh(user)
    return user


def edit_user(db: Session, user_id: str, body: EditUserRequest) -> User:
    """Update name, email and password after verifying the current password."""
    name = body.name.strip()
    email = body.email.strip().lower()
    if not name or not email:
        raise ValidationFailed("Fill in all fields.")

    user = get_user(db, user_id)

    existing = _find_by_email(db, email)
    if existing is not None and existing.id != user.id:
        raise Conflict("Email already exists")
    if not verify_password(body.currentPassword, user.password_hash):
        raise ValidationFailed("Invalid current password")
    if body.newPassword != body.confirmNewPassword:
        raise ValidationFailed("Passwords do not match")

    user.name = name
    user.email = email
    user.password_hash = hash_password(body.newPassword)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("Email already exists") from e
    db.refresh(user)
    return user
