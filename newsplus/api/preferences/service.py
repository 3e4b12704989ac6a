# newsplus/api/preferences/service.py
import logging
from typing import Tuple

from pydantic import TypeAdapter

from newsplus.storage.codec import ParseError, Parsed, decode_json, encode_json
from newsplus.storage.stores import KeyValueStore, storage_key
from .schemas import Preferences

logger = logging.getLogger(__name__)

_prefs = TypeAdapter(Preferences)


class PreferenceService:
    def __init__(self, store: KeyValueStore, prefix: str, user_email: str):
        self.store = store
        self.key = storage_key(prefix, "preferences", user_email)

    async def load(self) -> Tuple[Preferences, bool]:
        result = decode_json(await self.store.get(self.key), _prefs, Preferences)
        if isinstance(result, ParseError):
            logger.error("Failed to parse preferences (%s): %s", self.key, result.reason)
            return Preferences(), True
        if isinstance(result, Parsed):
            return result.data, False
        raise TypeError(f"unexpected parse result: {result!r}")

    async def save(self, prefs: Preferences) -> Preferences:
        await self.store.set(self.key, encode_json(_prefs, prefs))
        return prefs
