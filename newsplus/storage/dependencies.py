from typing import Annotated
from fastapi import Depends, Request
from .stores import KeyValueStore


async def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


StoreDep = Annotated[KeyValueStore, Depends(get_store)]
