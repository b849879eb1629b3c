"""
Medication API endpoints - Manual entry, edits and prescription scanning.
"""

import base64
import logging
from fastapi import APIRouter, HTTPException, Depends, status, UploadFile, File, Form
from typing import List, Optional

from ..agents import PrescriptionAgent, ReportAgent
from ..core import CareManager, ExtractionError, MedicationNotFoundError
from ..llm import LLMProvider
from ..models import (
    ExtractionResult, Medication, MedicationCreate, MedicationUpdate, Prescription, SummaryReport,
)
from ..storage import CareStorage
from .deps import care_manager, care_storage, get_llm_provider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/medications", tags=["medications"])

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/jpg", "image/webp"}


@router.get("", response_model=List[Medication])
async def list_medications(manager: CareManager = Depends(care_manager)):
    """List the user's medications."""
    return await manager.get_medications()


@router.post("", response_model=Medication, status_code=status.HTTP_201_CREATED)
async def add_medication(
    medication: MedicationCreate,
    manager: CareManager = Depends(care_manager),
):
    """
    Add a medication manually and reschedule today's doses.

    Args:
        medication: Medication details (a fresh id is assigned)

    Returns:
        Medication: The stored medication
    """
    new_med = Medication(**medication.model_dump())
    await manager.add_medications([new_med])
    return new_med


@router.put("/{medication_id}", response_model=Medication)
async def update_medication(
    medication_id: str,
    update: MedicationUpdate,
    manager: CareManager = Depends(care_manager),
):
    """
    Edit a medication. Doses already taken today stay taken.
    """
    try:
        return await manager.update_medication(medication_id, update)
    except MedicationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


class ScanResponse(ExtractionResult):
    """Scan outcome: extracted data plus the generated report."""
    report: SummaryReport
    prescription_id: str


@router.post("/scan", response_model=ScanResponse, status_code=status.HTTP_201_CREATED)
async def scan_prescription(
    image: UploadFile = File(...),
    doctor_name: Optional[str] = Form(default=None),
    manager: CareManager = Depends(care_manager),
    storage: CareStorage = Depends(care_storage),
    llm_provider: Optional[LLMProvider] = Depends(get_llm_provider),
):
    """
    Analyze a prescription photo.

    New medications are appended and today's schedule regenerated, extracted
    vitals are stored, a summary report is generated and the prescription is
    saved.
    """
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported image type: {image.content_type}"
        )

    content = await image.read()
    image_base64 = base64.b64encode(content).decode("utf-8")
    now = manager.clock()

    try:
        result = await PrescriptionAgent(llm_provider).extract(image_base64, image.content_type, now=now)
    except ExtractionError as e:
        logger.error(f"Prescription scan failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to analyze prescription. Please try a clearer image."
        )

    await manager.add_medications(result.medications)
    if result.vitals:
        await storage.add_vitals(result.vitals)

    report = await ReportAgent(llm_provider).generate(result.medications, result.vitals)

    prescription = Prescription(
        upload_date=now,
        media_type=image.content_type,
        medication_ids=[med.id for med in result.medications],
        doctor_name=doctor_name or "Unknown",
        notes=report.summary,
    )
    if not await storage.save_prescription(prescription, image=content):
        # Medications and vitals are already stored; a retry would duplicate them
        logger.error(
            "Failed to store scanned prescription",
            extra={"extra_fields": {
                "prescription_id": prescription.id,
                "medication_ids": prescription.medication_ids,
            }}
        )

    return ScanResponse(
        medications=result.medications,
        vitals=result.vitals,
        report=report,
        prescription_id=prescription.id,
    )


@router.get("/prescriptions", response_model=List[Prescription])
async def list_prescriptions(storage: CareStorage = Depends(care_storage)):
    """Scanned prescriptions, newest first."""
    return await storage.get_prescriptions()
