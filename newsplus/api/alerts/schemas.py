# newsplus/api/alerts/schemas.py
from typing import List, Literal, Optional

from newsplus.api.news.schemas import CamelModel

AlertType = Literal["keyword", "source", "author"]


class Alert(CamelModel):
    id: str
    keyword: str
    type: AlertType = "keyword"
    active: bool = True
    created_at: str


class AlertsDocument(CamelModel):
    """저장 형태: {alerts: [...], enabled: bool}"""
    alerts: List[Alert] = []
    enabled: bool = True


class AlertCreate(CamelModel):
    keyword: Optional[str] = None
    type: AlertType = "keyword"


class AlertUpdate(CamelModel):
    active: Optional[bool] = None


class AlertsEnabled(CamelModel):
    enabled: bool


class AlertsOut(AlertsDocument):
    recovered: bool = False
