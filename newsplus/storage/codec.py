# newsplus/storage/codec.py
"""저장소 JSON 디코딩. 결과는 Parsed | ParseError 로 반환하고 호출부가 둘 다 처리한다."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    data: T


@dataclass(frozen=True)
class ParseError:
    reason: str


ParseResult = Union[Parsed[T], ParseError]


def decode_json(raw: Optional[str], adapter: TypeAdapter, default: Callable[[], Any]) -> ParseResult:
    """
    raw가 None(키 없음)이면 default() 로 성공 처리.
    JSON 문법 오류/스키마 불일치는 ParseError.
    """
    if raw is None:
        return Parsed(default())
    try:
        obj = json.loads(raw)
    except ValueError as e:
        return ParseError(f"invalid json: {e}")
    try:
        return Parsed(adapter.validate_python(obj))
    except ValidationError as e:
        return ParseError(f"schema mismatch: {e.error_count()} error(s)")


def encode_json(adapter: TypeAdapter, value: Any) -> str:
    return adapter.dump_json(value, by_alias=True).decode("utf-8")


def now_iso() -> str:
    """저장용 타임스탬프. 2024-05-01T12:00:00.000Z 형태"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
