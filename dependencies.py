"""Store selection and FastAPI dependencies shared by the routers."""
import logging

from fastapi import Depends, Request

from config import Settings, settings
from errors import AuthError
from models.finance import User
from repositories.duckdb_store import DuckDBStore
from repositories.memory_store import MemoryStore
from services.auth_service import user_for_token

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session"


def build_store(config: Settings = settings):
    """Pick the storage backend from configuration."""
    if config.disable_db:
        logger.info("DISABLE_DB set; using in-memory store.")
        return MemoryStore(config.demo_user_email, config.session_ttl_days)

    store = DuckDBStore(config.db_file, config.demo_user_email, config.session_ttl_days)
    store.init_schema()
    logger.info(f"Using DuckDB store at {config.db_file}")
    return store


def get_store(request: Request):
    return request.app.state.store


def extract_token(request: Request) -> str | None:
    """Bearer token first, then the session cookie."""
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):]
    return request.cookies.get(SESSION_COOKIE)


def get_current_user(request: Request, store=Depends(get_store)) -> User:
    user = user_for_token(store, extract_token(request))
    if user is None:
        raise AuthError("Unauthorized")
    return user
