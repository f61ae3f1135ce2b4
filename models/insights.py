from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Insight:
    id: str
    user_id: str
    type: str
    title: str
    body: str
    status: str = "ACTIVE"
    data: Optional[dict] = None


@dataclass
class InsightModule:
    id: str
    title: str
    description: str
    insights: List[Insight] = field(default_factory=list)


@dataclass
class InsightFeedback:
    id: str
    user_id: str
    insight_id: str
    value: str
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
