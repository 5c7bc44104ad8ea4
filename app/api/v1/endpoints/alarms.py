"""
Alarm endpoints.

Alarm CRUD plus toggle and duplicate.
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_wake_service
from app.schemas.alarm import Alarm, AlarmCreate, AlarmUpdate
from app.services.wake_service import WakeService

router = APIRouter()


@router.get("", summary="List alarms in evaluation order.", response_model=list[Alarm], )
def list_alarms(service: WakeService = Depends(get_wake_service)):
    return service.list_alarms()


@router.post("", summary="Create an alarm.", response_model=Alarm, status_code=status.HTTP_201_CREATED, )
def create_alarm(data: AlarmCreate, service: WakeService = Depends(get_wake_service)):
    """
    Create an alarm.

    The id is generated server-side; omitted fields take their defaults
    (Mon-Fri at 07:00, MEDIUM difficulty, 5 minute snooze).
    """
    return service.create_alarm(data)


@router.get("/{alarm_id}", summary="Get an alarm.", response_model=Alarm, )
def get_alarm(alarm_id: str, service: WakeService = Depends(get_wake_service)):
    return service.get_alarm(alarm_id)


@router.patch("/{alarm_id}", summary="Edit an alarm.", response_model=Alarm, )
def update_alarm(alarm_id: str, data: AlarmUpdate, service: WakeService = Depends(get_wake_service)):
    """Partial update: only the fields sent are changed."""
    return service.update_alarm(alarm_id, data)


@router.post("/{alarm_id}/toggle", summary="Flip the alarm's active flag.", response_model=Alarm, )
def toggle_alarm(alarm_id: str, service: WakeService = Depends(get_wake_service)):
    return service.toggle_alarm(alarm_id)


@router.post("/{alarm_id}/duplicate", summary="Copy an alarm (inactive).", response_model=Alarm,
             status_code=status.HTTP_201_CREATED, )
def duplicate_alarm(alarm_id: str, service: WakeService = Depends(get_wake_service)):
    return service.duplicate_alarm(alarm_id)


@router.delete("/{alarm_id}", summary="Delete an alarm.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_alarm(alarm_id: str, service: WakeService = Depends(get_wake_service)):
    service.delete_alarm(alarm_id)
