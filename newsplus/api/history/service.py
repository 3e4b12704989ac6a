# newsplus/api/history/service.py
from __future__ import annotations

import logging
from typing import List, Tuple

from pydantic import TypeAdapter

from newsplus.api.news.schemas import Article
from newsplus.storage.codec import ParseError, Parsed, decode_json, encode_json, now_iso
from newsplus.storage.stores import KeyValueStore, storage_key
from .schemas import ReadEvent

logger = logging.getLogger(__name__)

_events = TypeAdapter(List[ReadEvent])


class HistoryService:
    """
    읽기 기록. 최신순, 최대 limit개 (넘치면 가장 오래된 것부터 버림).
    여러 탭에서 동시에 쓰면 마지막 쓰기가 이김.
    """

    def __init__(self, store: KeyValueStore, prefix: str, user_email: str, limit: int = 100):
        self.store = store
        self.key = storage_key(prefix, "history", user_email)
        self.limit = limit

    async def load(self) -> Tuple[List[ReadEvent], bool]:
        """(기록, 손상 복구 여부). 깨진 값은 빈 기록으로 취급."""
        result = decode_json(await self.store.get(self.key), _events, list)
        if isinstance(result, ParseError):
            logger.error("Failed to parse reading history (%s): %s", self.key, result.reason)
            return [], True
        if isinstance(result, Parsed):
            return result.data, False
        raise TypeError(f"unexpected parse result: {result!r}")

    async def _save(self, events: List[ReadEvent]) -> None:
        await self.store.set(self.key, encode_json(_events, events))

    async def record(self, article: Article) -> ReadEvent:
        events, _ = await self.load()
        event = ReadEvent(**article.model_dump(), read_at=now_iso())
        events.insert(0, event)
        await self._save(events[: self.limit])
        return event

    async def remove(self, url: str) -> bool:
        events, _ = await self.load()
        kept = [e for e in events if e.url != url]
        if len(kept) == len(events):
            return False
        await self._save(kept)
        return True

    async def clear(self) -> None:
        await self.store.delete(self.key)
