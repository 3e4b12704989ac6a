from typing import Annotated

from fastapi import APIRouter, Depends, Request

from newsplus.api.user.auth import CurrentUserDep
from newsplus.storage.dependencies import StoreDep
from .schemas import Preferences, PreferencesOut
from .service import PreferenceService

router = APIRouter(prefix="/preferences", tags=["preferences"])


async def get_preference_service(
    request: Request, current: CurrentUserDep, store: StoreDep
) -> PreferenceService:
    return PreferenceService(store, request.app.state.settings.STORAGE_PREFIX, current.email)


PreferenceServiceDep = Annotated[PreferenceService, Depends(get_preference_service)]


@router.get("", response_model=PreferencesOut, summary="뉴스 환경설정 조회")
async def get_preferences(svc: PreferenceServiceDep):
    prefs, recovered = await svc.load()
    return PreferencesOut(**prefs.model_dump(), recovered=recovered)


@router.put("", response_model=PreferencesOut, summary="뉴스 환경설정 저장")
async def put_preferences(body: Preferences, svc: PreferenceServiceDep):
    saved = await svc.save(body)
    return PreferencesOut(**saved.model_dump())
