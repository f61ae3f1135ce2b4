import datetime
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dependencies import get_current_user, get_store
from models.finance import User
from services.transaction_service import (
    add_transaction,
    get_all_transactions,
    update_transaction_category,
)
from utils.serialization import to_json

router = APIRouter()


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ManualTransaction(CamelModel):
    account_id: str
    description: str = Field(..., min_length=1)
    amount: Decimal
    currency: Optional[str] = None
    date: datetime.date
    category_id: Optional[int] = None
    is_transfer: Optional[bool] = None
    is_recurring: bool = False


class CategoryUpdate(CamelModel):
    category_id: Optional[int]


def _split(value: Optional[str]) -> list:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


# -------------------------
# READ TRANSACTIONS
# -------------------------

@router.get("")
def list_transactions(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    search: Optional[str] = None,
    categories: Optional[str] = None,
    accounts: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: Optional[int] = Query(None, ge=0),
    user: User = Depends(get_current_user),
    store=Depends(get_store),
):
    category_ids = [int(c) for c in _split(categories) if c.isdigit()]
    items, total = get_all_transactions(
        store,
        user.id,
        start=start_date,
        end=end_date,
        categories=category_ids or None,
        accounts=_split(accounts) or None,
        search=search,
        limit=limit,
        offset=offset,
    )
    return {"items": to_json(items), "total": total}


# -------------------------
# MANUAL TRANSACTION
# -------------------------

@router.post("", status_code=201)
def create_manual_transaction(
    payload: ManualTransaction,
    user: User = Depends(get_current_user),
    store=Depends(get_store),
):
    transaction = add_transaction(
        store,
        user_id=user.id,
        account_id=payload.account_id,
        date=payload.date,
        description=payload.description,
        amount=payload.amount,
        currency=payload.currency or user.currency,
        category_id=payload.category_id,
        is_transfer=payload.is_transfer,
        is_recurring=payload.is_recurring,
    )
    return to_json(transaction)


# -------------------------
# UPDATE CATEGORY
# -------------------------

@router.post("/{transaction_id}/category")
def recategorize(
    transaction_id: str,
    payload: CategoryUpdate,
    user: User = Depends(get_current_user),
    store=Depends(get_store),
):
    transaction = update_transaction_category(store, user.id, transaction_id, payload.category_id)
    return to_json(transaction)
