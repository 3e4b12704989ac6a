# newsplus/storage/stores.py
"""
사용자별 key-value 저장소.

키 형식: <app>-<feature>-<userEmail>  (예: newsplus-history-a@b.com)
값은 JSON 문자열. 백엔드는 설정(STORE_BACKEND)으로 고른다.
"""
from __future__ import annotations

import asyncio
import hashlib
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsplus.db.models import KeyValueEntry, utcnow

logger = logging.getLogger(__name__)


def storage_key(prefix: str, feature: str, user_email: str) -> str:
    return f"{prefix}-{feature}-{user_email}"


class KeyValueStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...


class MemoryStore(KeyValueStore):
    def __init__(self):
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


def _atomic_write(path: str, text: str) -> None:
    tmp = f"{path}.tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(text)
    os.replace(tmp, path)


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


class JsonFileStore(KeyValueStore):
    """
    키 하나당 파일 하나. 파일명은 키의 sha1 (이메일 문자를 그대로 쓰지 않기 위해).
    각 파일은 {"key": ..., "value": ...} 형태로 저장.
    """

    def __init__(self, directory: str):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, key: str) -> str:
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
        return os.path.join(self.directory, f"{digest}.json")

    def _read(self, key: str) -> Optional[str]:
        try:
            with open(self._path(key), "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return None
        try:
            doc = json.loads(raw)
        except ValueError:
            # 래퍼가 깨졌으면 원문 그대로 넘겨서 호출부의 디코더가 판단하게 함
            return raw
        if isinstance(doc, dict) and "value" in doc:
            return doc["value"]
        return raw

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        text = json.dumps({"key": key, "value": value}, ensure_ascii=False)
        await asyncio.to_thread(_atomic_write, self._path(key), text)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(_remove, self._path(key))


class SqlStore(KeyValueStore):
    """서버 DB(kv_entries)에 저장. 연산마다 세션을 새로 연다. 동시 쓰기는 마지막 쓰기가 이김."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self.sessionmaker = sessionmaker

    async def get(self, key: str) -> Optional[str]:
        async with self.sessionmaker() as session:
            row = await session.get(KeyValueEntry, key)
            return row.value if row else None

    async def set(self, key: str, value: str) -> None:
        now = utcnow()
        async with self.sessionmaker() as session:
            if await session.get(KeyValueEntry, key) is None:
                session.add(KeyValueEntry(key=key, value=value, updated_at=now))
                try:
                    await session.commit()
                    return
                except IntegrityError:
                    # 같은 키의 첫 쓰기가 동시에 들어온 경우: update로 덮어씀
                    await session.rollback()
                    logger.debug("kv insert raced for %s, updating instead", key)

            await session.execute(
                update(KeyValueEntry)
                .where(KeyValueEntry.key == key)
                .values(value=value, updated_at=now)
            )
            await session.commit()

    async def delete(self, key: str) -> None:
        async with self.sessionmaker() as session:
            await session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
            await session.commit()


def build_store(backend: str, *, directory: str = "", sessionmaker=None) -> KeyValueStore:
    if backend == "memory":
        return MemoryStore()
    if backend == "file":
        return JsonFileStore(directory)
    if backend == "sql":
        if sessionmaker is None:
            raise ValueError("sql store requires a sessionmaker")
        return SqlStore(sessionmaker)
    raise ValueError(f"unknown store backend: {backend}")
