from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from newsplus.api.user.auth import CurrentUserDep
from newsplus.api.user.schemas import MessageResponse
from newsplus.storage.dependencies import StoreDep
from .schemas import Alert, AlertCreate, AlertsEnabled, AlertsOut, AlertUpdate
from .service import AlertService

router = APIRouter(prefix="/alerts", tags=["alerts"])


async def get_alert_service(request: Request, current: CurrentUserDep, store: StoreDep) -> AlertService:
    return AlertService(store, request.app.state.settings.STORAGE_PREFIX, current.email)


AlertServiceDep = Annotated[AlertService, Depends(get_alert_service)]


@router.get("", response_model=AlertsOut, summary="알림 목록")
async def list_alerts(svc: AlertServiceDep):
    doc, recovered = await svc.load()
    return AlertsOut(alerts=doc.alerts, enabled=doc.enabled, recovered=recovered)


@router.post("", response_model=Alert, status_code=status.HTTP_201_CREATED, summary="알림 추가")
async def create_alert(body: AlertCreate, svc: AlertServiceDep):
    if not (body.keyword or "").strip():
        raise HTTPException(status_code=400, detail="Please enter a keyword for the alert")
    return await svc.add(body.keyword, body.type)


@router.put("/enabled", response_model=AlertsOut, summary="알림 전체 on/off")
async def set_alerts_enabled(body: AlertsEnabled, svc: AlertServiceDep):
    doc = await svc.set_enabled(body.enabled)
    return AlertsOut(alerts=doc.alerts, enabled=doc.enabled)


@router.patch("/{alert_id}", response_model=Alert, summary="알림 활성 토글")
async def update_alert(
    alert_id: str,
    svc: AlertServiceDep,
    body: Optional[AlertUpdate] = Body(None),
):
    alert = await svc.set_active(alert_id, body.active if body else None)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert


@router.delete("/{alert_id}", response_model=MessageResponse, summary="알림 삭제")
async def delete_alert(alert_id: str, svc: AlertServiceDep):
    if not await svc.delete(alert_id):
        raise HTTPException(status_code=404, detail="Alert not found")
    return MessageResponse(message="Alert deleted")
