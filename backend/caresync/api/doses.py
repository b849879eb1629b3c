"""
Dose API endpoints - Today's timeline, status toggles, reminders and adherence.
"""

from fastapi import APIRouter, HTTPException, Depends, Query, status
from typing import List, Optional

from ..config import settings
from ..core import CareManager, DoseNotFoundError
from ..models import AdherenceStats, DoseInstance
from ..storage import CareStorage
from .deps import care_manager, care_storage

router = APIRouter(prefix="/doses", tags=["doses"])


@router.get("/today", response_model=List[DoseInstance])
async def get_today_doses(manager: CareManager = Depends(care_manager)):
    """Today's reconciled dose timeline, ordered by time."""
    return await manager.get_today_doses()


@router.post("/{dose_id}/toggle", response_model=DoseInstance)
async def toggle_dose(dose_id: str, manager: CareManager = Depends(care_manager)):
    """
    Mark a dose taken, or back to pending if it was already taken.

    Returns:
        DoseInstance: The updated dose, as recorded in history
    """
    try:
        return await manager.toggle_dose(dose_id)
    except DoseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/history", response_model=List[DoseInstance])
async def get_dose_history(storage: CareStorage = Depends(care_storage)):
    """All recorded dose actions."""
    return await storage.get_dose_history()


@router.get("/adherence", response_model=AdherenceStats)
async def get_adherence(
    days: int = Query(default=settings.adherence_window_days, ge=1, le=365),
    manager: CareManager = Depends(care_manager),
):
    """Adherence over the last ``days`` days of recorded history."""
    return await manager.adherence(days)


@router.get("/reminders", response_model=List[DoseInstance])
async def get_due_reminders(manager: CareManager = Depends(care_manager)):
    """Pending doses due right now."""
    return await manager.due_reminders()


@router.get("/reminders/active", response_model=Optional[DoseInstance])
async def get_active_reminder(manager: CareManager = Depends(care_manager)):
    """The reminder currently surfaced by the polling job, if any."""
    return manager.active_reminder


@router.delete("/reminders/active", status_code=status.HTTP_204_NO_CONTENT)
async def dismiss_active_reminder(manager: CareManager = Depends(care_manager)):
    manager.dismiss_reminder()
