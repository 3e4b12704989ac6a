# newsplus/api/alerts/service.py
from __future__ import annotations

import logging
import uuid
from typing import Optional, Tuple

from pydantic import TypeAdapter

from newsplus.storage.codec import ParseError, Parsed, decode_json, encode_json, now_iso
from newsplus.storage.stores import KeyValueStore, storage_key
from .schemas import Alert, AlertsDocument, AlertType

logger = logging.getLogger(__name__)

_doc = TypeAdapter(AlertsDocument)


class AlertService:
    """사용자 정의 뉴스 알림. 서버 측 검증은 키워드가 비어있지 않은지만 확인."""

    def __init__(self, store: KeyValueStore, prefix: str, user_email: str):
        self.store = store
        self.key = storage_key(prefix, "alerts", user_email)

    async def load(self) -> Tuple[AlertsDocument, bool]:
        result = decode_json(await self.store.get(self.key), _doc, AlertsDocument)
        if isinstance(result, ParseError):
            logger.error("Failed to parse alerts (%s): %s", self.key, result.reason)
            return AlertsDocument(), True
        if isinstance(result, Parsed):
            return result.data, False
        raise TypeError(f"unexpected parse result: {result!r}")

    async def _save(self, doc: AlertsDocument) -> None:
        await self.store.set(self.key, encode_json(_doc, doc))

    async def add(self, keyword: str, type_: AlertType = "keyword") -> Alert:
        doc, _ = await self.load()
        alert = Alert(
            id=uuid.uuid4().hex,
            keyword=keyword.strip(),
            type=type_,
            active=True,
            created_at=now_iso(),
        )
        doc.alerts.append(alert)
        await self._save(doc)
        return alert

    async def set_active(self, alert_id: str, active: Optional[bool] = None) -> Optional[Alert]:
        """active가 None이면 토글"""
        doc, _ = await self.load()
        for alert in doc.alerts:
            if alert.id == alert_id:
                alert.active = (not alert.active) if active is None else active
                await self._save(doc)
                return alert
        return None

    async def delete(self, alert_id: str) -> bool:
        doc, _ = await self.load()
        kept = [a for a in doc.alerts if a.id != alert_id]
        if len(kept) == len(doc.alerts):
            return False
        doc.alerts = kept
        await self._save(doc)
        return True

    async def set_enabled(self, enabled: bool) -> AlertsDocument:
        doc, _ = await self.load()
        doc.enabled = enabled
        await self._save(doc)
        return doc
