"""
Active trigger endpoints — current ringing alarm, challenge and resolution.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_wake_service
from app.schemas.trigger import (
    AnswerRequest,
    Challenge,
    DismissRequest,
    ResolutionResult,
    TriggerResponse,
)
from app.services.wake_service import WakeService

router = APIRouter()


@router.get("", summary="Get the trigger controller state and the ringing alarm.", response_model=TriggerResponse, )
def current_trigger(service: WakeService = Depends(get_wake_service)):
    return service.current_trigger()


@router.get("/challenge", summary="Get the wake-up challenge for the ringing alarm.", response_model=Challenge, )
def get_challenge(service: WakeService = Depends(get_wake_service)):
    return service.challenge()


@router.post("/answer", summary="Answer the challenge.", response_model=ResolutionResult, )
def answer_challenge(data: AnswerRequest, service: WakeService = Depends(get_wake_service)):
    """A correct answer dismisses the alarm; a wrong one keeps it ringing."""
    return service.answer(data.option)


@router.post("/dismiss", summary="Resolve the ringing alarm.", response_model=ResolutionResult, )
def dismiss(data: DismissRequest, service: WakeService = Depends(get_wake_service)):
    return service.resolve_dismiss(data.success)


@router.post("/snooze", summary="Snooze the ringing alarm.", response_model=ResolutionResult, )
def snooze(service: WakeService = Depends(get_wake_service)):
    return service.resolve_snooze()
