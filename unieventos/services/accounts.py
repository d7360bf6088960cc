import logging

import jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from unieventos.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    new_token_id,
    verify_password,
)
from unieventos.models.users import Role, UserProfile
from unieventos.services.store import StoreError

logger = logging.getLogger(__name__)


class EmailAlreadyRegisteredError(Exception):
    pass


class InvalidCredentialsError(Exception):
    pass


def get_profile_by_email(db: Session, email: str) -> UserProfile | None:
    return db.scalar(select(UserProfile).where(UserProfile.email == email.strip().lower()))


def sign_up(db: Session, *, email: str, password: str, role: Role) -> UserProfile:
    email = email.strip().lower()
    if get_profile_by_email(db, email) is not None:
        raise EmailAlreadyRegisteredError("Email is already registered.")

    profile = UserProfile(email=email, role=role.value, password_hash=hash_password(password))
    try:
        db.add(profile)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EmailAlreadyRegisteredError("Email is already registered.") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("Could not create profile.") from e

    db.refresh(profile)
    logger.info("Created %s profile %s", profile.role, profile.uid)
    return profile


def rotate_token_id(db: Session, profile: UserProfile) -> str:
    token_id = new_token_id()
    try:
        profile.token_id = token_id
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("Could not update session.") from e
    return token_id


def log_in(db: Session, *, email: str, password: str) -> str:
    profile = get_profile_by_email(db, email)
    if profile is None or not verify_password(profile.password_hash, password):
        raise InvalidCredentialsError("Invalid email or password.")

    token_id = rotate_token_id(db, profile)
    return create_access_token(data={"sub": profile.uid}, jti=token_id)


def log_out(db: Session, profile: UserProfile) -> None:
    try:
        rotate_token_id(db, profile)
    except StoreError:
        logger.exception("Error signing out user %s", profile.uid)
        raise


def get_profile_for_token(db: Session, token: str) -> UserProfile | None:
    try:
        payload = decode_access_token(token)
    except jwt.InvalidTokenError:
        return None

    profile = db.get(UserProfile, payload["sub"])
    if profile is None or profile.token_id != payload["jti"]:
        return None
    return profile
