from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from dependencies import get_current_user, get_store
from errors import AppError
from models.finance import User
from services.csv_ingest_service import ingest_csv
from utils.serialization import to_json

router = APIRouter()


@router.post("/upload")
def upload_csv(
    file: UploadFile = File(...),
    account_id: Optional[str] = Form(None, alias="accountId"),
    account_name: Optional[str] = Form(None, alias="accountName"),
    institution: Optional[str] = Form(None),
    account_type: Optional[str] = Form(None, alias="accountType"),
    currency: Optional[str] = Form(None),
    user: User = Depends(get_current_user),
    store=Depends(get_store),
):
    """Import a bank statement CSV into an existing account or one named on the fly."""
    currency = currency or user.currency

    if not account_id and account_name:
        account = store.upsert_account(
            user_id=user.id,
            name=account_name,
            institution=institution or "Uploaded CSV",
            type=account_type or "chequing",
            currency=currency,
        )
        account_id = account.id
    if not account_id:
        raise AppError("Provide accountId or accountName", status_code=400)

    contents_bytes = file.file.read()
    result = ingest_csv(store, user.id, account_id, contents_bytes, currency)
    return to_json(result)
