from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from dependencies import get_current_user, get_store
from models.dashboard_dto import DashboardFilters
from models.finance import User
from services.dashboard_service import summarize_dashboard
from utils.serialization import to_json

router = APIRouter()


@router.get("/summary")
def dashboard_summary(
    timeframe: Literal["WEEK", "MONTH", "QUARTER", "YEAR"] = Query("MONTH"),
    period_offset: Optional[int] = Query(None, alias="periodOffset"),
    label_id: Optional[str] = Query(None, alias="labelId"),
    user: User = Depends(get_current_user),
    store=Depends(get_store),
):
    """Cashflow, category and budget rollups for the signed-in user."""
    filters = DashboardFilters(
        timeframe=timeframe,
        period_offset=period_offset,
        label_id=label_id,
    )
    return to_json(summarize_dashboard(store, user.id, filters))
