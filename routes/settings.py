from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from dependencies import get_current_user, get_store
from errors import NotFoundError
from models.finance import User
from seed_data import CATEGORIES, INSIGHT_FEEDBACK_OPTIONS
from utils.serialization import to_json

router = APIRouter()


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=80)
    locale: Optional[str] = None
    currency: Optional[str] = None
    province: Optional[str] = Field(None, max_length=40)
    phone: Optional[str] = Field(None, max_length=30)


def _profile(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "locale": user.locale,
        "currency": user.currency,
        "province": user.province,
        "phone": user.phone,
    }


@router.get("/profile")
def get_profile(user: User = Depends(get_current_user), store=Depends(get_store)):
    current = store.find_user_by_id(user.id)
    if current is None:
        raise NotFoundError("User not found")
    return _profile(current)


@router.patch("/profile")
def update_profile(payload: ProfileUpdate, user: User = Depends(get_current_user),
                   store=Depends(get_store)):
    updated = store.update_user(user.id, payload.model_dump(exclude_unset=True))
    return _profile(updated)


@router.get("/accounts")
def list_accounts(user: User = Depends(get_current_user), store=Depends(get_store)):
    return {"accounts": to_json(store.list_accounts(user.id))}


@router.get("/categories")
def list_categories(user: User = Depends(get_current_user)):
    return {"categories": to_json(CATEGORIES)}


@router.get("/feedback-options")
def feedback_options(user: User = Depends(get_current_user)):
    return {"options": INSIGHT_FEEDBACK_OPTIONS}
