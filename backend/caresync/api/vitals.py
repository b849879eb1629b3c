"""
Vitals API endpoints.
"""

from fastapi import APIRouter, Depends, status
from typing import List

from ..core import CareManager
from ..models import VitalCreate, VitalRecord
from ..storage import CareStorage
from .deps import care_manager, care_storage

router = APIRouter(prefix="/vitals", tags=["vitals"])


@router.get("", response_model=List[VitalRecord])
async def list_vitals(storage: CareStorage = Depends(care_storage)):
    """All recorded vitals, newest first."""
    return await storage.get_vitals()


@router.post("", response_model=VitalRecord, status_code=status.HTTP_201_CREATED)
async def add_vital(vital: VitalCreate, manager: CareManager = Depends(care_manager)):
    """
    Record a manual vital reading. The status is computed from the value.
    """
    return await manager.record_vital(vital)
