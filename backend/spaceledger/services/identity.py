"""
Identity directory - user registration and identity resolution.

Sign-in flows (OAuth redirects, wallets in the browser) live outside this
service; callers hand over what they resolved and get a User back.
"""
import logging
from typing import Optional
from uuid import UUID

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from spaceledger.models import User
from spaceledger.schemas.user import UserCreate
from spaceledger.services.errors import DuplicateKey, InvalidArgument, Unauthenticated
from spaceledger.services.store import find_one, get_by_id, unit_of_work

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def get_user(db: Session, user_id: UUID) -> User:
    return get_by_id(db, User, user_id, "User")


def register_user(db: Session, data: UserCreate) -> User:
    """Create a user; username, email and wallet address are each unique."""
    if find_one(db, User, username=data.username):
        raise DuplicateKey("Username already exists")
    if find_one(db, User, email=data.email):
        raise DuplicateKey("Email already exists")
    if data.wallet_address and find_one(db, User, wallet_address=data.wallet_address):
        raise DuplicateKey("Wallet address already registered")

    user = User(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password) if data.password else None,
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role.value,
        wallet_address=data.wallet_address or None,
    )
    try:
        with unit_of_work(db):
            db.add(user)
    except IntegrityError:
        raise DuplicateKey("Username, email or wallet address already registered")
    db.refresh(user)
    logger.info(f"Registered user {user.username} ({user.role.value}): id={user.id}")
    return user


def resolve_identity(
    db: Session,
    username: Optional[str] = None,
    password: Optional[str] = None,
    wallet_address: Optional[str] = None,
) -> User:
    """Resolve a caller by wallet address, or by username and password."""
    if wallet_address:
        user = find_one(db, User, wallet_address=wallet_address)
        if not user:
            raise Unauthenticated("Invalid wallet address")
        return user

    if not username or not password:
        raise InvalidArgument("Username and password are required")

    user = find_one(db, User, username=username)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed sign-in for username {username}")
        raise Unauthenticated("Invalid username or password")
    return user
