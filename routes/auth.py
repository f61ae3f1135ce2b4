from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field

from config import settings
from dependencies import SESSION_COOKIE, extract_token, get_current_user, get_store
from models.finance import User, public_user
from services import auth_service

router = APIRouter()

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    # Empty string registers a passwordless account
    password: Optional[str] = Field(None, pattern=r"^$|^.{8,}$")
    name: Optional[str] = Field(None, min_length=1, max_length=80)
    locale: Optional[str] = None
    currency: Optional[str] = None


class LoginRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: Optional[str] = None


def _start_session(response: Response, user: User, session):
    response.set_cookie(
        SESSION_COOKIE,
        session.token,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
        max_age=settings.session_ttl_days * 24 * 60 * 60,
    )
    return {"token": session.token, "user": public_user(user)}


@router.post("/register", status_code=201)
def register(payload: RegisterRequest, response: Response, store=Depends(get_store)):
    user, session = auth_service.register(
        store,
        email=payload.email,
        password=payload.password or None,
        name=payload.name,
        locale=payload.locale or "en-CA",
        currency=payload.currency or settings.default_currency,
    )
    return _start_session(response, user, session)


@router.post("/login")
def login(payload: LoginRequest, response: Response, store=Depends(get_store)):
    user, session = auth_service.login(store, payload.email, payload.password)
    return _start_session(response, user, session)


@router.post("/demo")
def demo(response: Response, store=Depends(get_store)):
    user, session = auth_service.demo_login(store)
    return _start_session(response, user, session)


@router.post("/logout", status_code=204)
def logout(request: Request, user: User = Depends(get_current_user), store=Depends(get_store)):
    store.delete_session(extract_token(request))
    response = Response(status_code=204)
    response.delete_cookie(SESSION_COOKIE)
    return response


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return {"user": public_user(user)}
