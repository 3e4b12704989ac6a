# newsplus/api/news/refresh.py
"""
"새로고침" 결과 다양화.

서버 측 난수 없이, 클라이언트가 넘긴 seed 하나로 결과 순서와 쿼리를 결정적으로 바꾼다.
같은 seed면 항상 같은 결과. 보안 용도의 난수로 쓰면 안 됨.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

INTENSIFIERS = ["latest", "trending", "recent", "popular", "important", "breaking"]
SORT_STRATEGIES = ["relevancy", "popularity", "publishedAt"]
# JS Number.MAX_SAFE_INTEGER. 이보다 크면 sin() 입력으로 쓸 수 없음
MAX_SEED = 2**53 - 1


def seeded_random(seed: int) -> Callable[[], float]:
    """sin 기반 결정적 난수열. 호출할 때마다 seed가 1씩 증가, 값은 [0, 1)."""
    state = seed

    def _next() -> float:
        nonlocal state
        x = math.sin(state) * 10000
        state += 1
        return x - math.floor(x)

    return _next


def seeded_shuffle(items: Sequence[T], seed: int) -> List[T]:
    """Fisher-Yates. 입력은 건드리지 않고 복사본을 섞어서 반환."""
    result = list(items)
    random = seeded_random(seed)

    i = len(result)
    while i > 0:
        j = math.floor(random() * i)
        i -= 1
        result[i], result[j] = result[j], result[i]
    return result


@dataclass(frozen=True)
class ModulatedQuery:
    query: str
    page_size: int
    sort_by: str


def modulate_query(
    query: str,
    page_size: int,
    sort_by: str,
    seed: Optional[int],
) -> ModulatedQuery:
    if seed is None:
        return ModulatedQuery(query=query, page_size=page_size, sort_by=sort_by)

    if query:
        # 검색: seed로 고른 단어 하나를 덧붙임
        word = INTENSIFIERS[seed % len(INTENSIFIERS)]
        return ModulatedQuery(query=f"{query} {word}", page_size=page_size, sort_by=sort_by)

    # 카테고리 탐색: 정렬 기준 변경 + page size 0~2 증가
    return ModulatedQuery(
        query=query,
        page_size=page_size + (seed % 3),
        sort_by=SORT_STRATEGIES[seed % len(SORT_STRATEGIES)],
    )
