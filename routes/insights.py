from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from dependencies import get_current_user, get_store
from models.finance import User
from seed_data import INSIGHT_FEEDBACK_OPTIONS
from utils.serialization import to_json

router = APIRouter()


class FeedbackRequest(BaseModel):
    value: Literal["USEFUL", "NOT_RELEVANT", "TOO_OBVIOUS", "INACCURATE", "OTHER"]
    comment: Optional[str] = Field(None, max_length=280)


@router.get("")
def list_insights(user: User = Depends(get_current_user), store=Depends(get_store)):
    modules = store.get_insight_modules(user.id)
    return {"modules": to_json(modules), "feedbackOptions": INSIGHT_FEEDBACK_OPTIONS}


@router.post("/{insight_id}/feedback", status_code=201)
def record_feedback(
    insight_id: str,
    payload: FeedbackRequest,
    user: User = Depends(get_current_user),
    store=Depends(get_store),
):
    feedback = store.record_insight_feedback(user.id, insight_id, payload.value, payload.comment)
    return to_json(feedback)
