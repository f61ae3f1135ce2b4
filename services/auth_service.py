import logging

import bcrypt

from errors import AuthError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(_password_bytes(password), hashed_password.encode("utf-8"))


def register(store, email, password=None, name=None, locale="en-CA", currency="CAD"):
    """Create a user and open a session. An empty password means a passwordless account."""
    if store.find_user_by_email(email):
        raise ConflictError("Account already exists")

    password_hash = hash_password(password) if password else None
    user = store.create_user(
        email=email,
        password_hash=password_hash,
        name=name,
        locale=locale,
        currency=currency,
    )
    logger.info(f"Registered user {user.id}")
    return user, store.create_session(user.id)


def login(store, email, password=None):
    user = store.find_user_by_email(email)
    if user is None:
        raise NotFoundError("Account not found")

    if user.password_hash:
        if not password:
            raise AuthError("Password required")
        if not verify_password(password, user.password_hash):
            raise AuthError("Invalid credentials")

    return user, store.create_session(user.id)


def demo_login(store):
    user = store.find_user_by_email(store.demo_user_email)
    if user is None:
        raise AuthError("Demo unavailable", status_code=500)
    return user, store.create_session(user.id)


def user_for_token(store, token):
    if not token:
        return None
    return store.get_user_by_session(token)
