"""
Care Storage - Persistent medication, dose history, vitals and prescription records.
Each record set is a JSON list stored through a StorageInterface.
"""

import json
import logging
from datetime import date
from typing import Optional, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..models import DoseInstance, Medication, Prescription, VitalRecord
from .interface import StorageInterface

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CareStorage:
    """
    Manages the named care records of the (single) user.
    Files live in the ``care/`` directory of the underlying storage.
    """

    def __init__(self, storage: StorageInterface):
        """
        Initialize care storage.

        Args:
            storage: StorageInterface implementation (typically LocalStorage)
        """
        self.storage = storage
        self.care_dir = "care"
        self._medications_path = f"{self.care_dir}/medications.json"
        self._doses_path = f"{self.care_dir}/dose_history.json"
        self._vitals_path = f"{self.care_dir}/vitals.json"
        self._prescriptions_path = f"{self.care_dir}/prescriptions.json"

    async def _load_records(self, path: str, model: Type[ModelT]) -> List[ModelT]:
        """Load a JSON list of records; a missing or corrupt file reads as empty."""
        content = await self.storage.load(path)
        if content is None:
            return []
        try:
            raw = json.loads(content.decode('utf-8'))
            return [model.model_validate(item) for item in raw]
        except (ValueError, ValidationError) as e:
            logger.error(f"Unreadable records in {path}: {e}")
            return []

    async def _save_records(self, path: str, records: List[BaseModel]) -> bool:
        content = json.dumps(
            [record.model_dump(mode="json") for record in records],
            indent=2,
            ensure_ascii=False,
        )
        saved = await self.storage.save(path, content)
        if not saved:
            logger.error(f"Failed to persist {len(records)} records to {path}")
        return saved

    # Medications

    async def get_medications(self) -> List[Medication]:
        return await self._load_records(self._medications_path, Medication)

    async def save_medications(self, medications: List[Medication]) -> bool:
        return await self._save_records(self._medications_path, medications)

    # Dose history

    async def get_dose_history(self) -> List[DoseInstance]:
        return await self._load_records(self._doses_path, DoseInstance)

    async def get_dose_history_for(self, target_date: date) -> List[DoseInstance]:
        """Get recorded doses dated ``target_date``."""
        history = await self.get_dose_history()
        return [dose for dose in history if dose.date == target_date]

    async def upsert_dose(self, dose: DoseInstance) -> bool:
        """
        Record a dose, replacing the stored row with the same id if any.

        Args:
            dose: Dose instance to record

        Returns:
            bool: True if the history was written
        """
        history = await self.get_dose_history()
        for index, existing in enumerate(history):
            if existing.id == dose.id:
                history[index] = dose
                break
        else:
            history.append(dose)
        return await self._save_records(self._doses_path, history)

    # Vitals

    async def get_vitals(self) -> List[VitalRecord]:
        """Get all vitals, newest first."""
        return await self._load_records(self._vitals_path, VitalRecord)

    async def add_vitals(self, vitals: List[VitalRecord]) -> bool:
        """Prepend new vitals so the list stays newest first."""
        existing = await self.get_vitals()
        return await self._save_records(self._vitals_path, list(vitals) + existing)

    # Prescriptions

    async def get_prescriptions(self) -> List[Prescription]:
        """Get all prescriptions, newest first."""
        return await self._load_records(self._prescriptions_path, Prescription)

    async def get_prescription(self, prescription_id: str) -> Optional[Prescription]:
        for prescription in await self.get_prescriptions():
            if prescription.id == prescription_id:
                return prescription
        return None

    async def save_prescription(self, prescription: Prescription, image: Optional[bytes] = None) -> bool:
        """
        Store a prescription record and, optionally, the scanned image.

        Args:
            prescription: Prescription record
            image: Raw image bytes, stored beside the record

        Returns:
            bool: True if the record was written
        """
        if image is not None:
            await self.storage.save(
                self.prescription_image_path(prescription),
                image,
                metadata={"media_type": prescription.media_type, "size": len(image)},
            )

        prescriptions = await self.get_prescriptions()
        prescriptions.insert(0, prescription)
        return await self._save_records(self._prescriptions_path, prescriptions)

    def prescription_image_path(self, prescription: Prescription) -> str:
        extension = prescription.media_type.split("/")[-1] or "bin"
        return f"{self.care_dir}/prescriptions/{prescription.id}.{extension}"


# Global care storage instance
_care_storage: Optional[CareStorage] = None


def init_care_storage(storage: StorageInterface) -> CareStorage:
    """
    Initialize the global care storage instance.

    Args:
        storage: StorageInterface implementation to persist through

    Returns:
        CareStorage: The new global instance
    """
    global _care_storage
    _care_storage = CareStorage(storage)
    return _care_storage


def get_care_storage() -> CareStorage:
    """
    Get the global care storage instance.

    Raises:
        RuntimeError: If care storage has not been initialized
    """
    if _care_storage is None:
        raise RuntimeError("Care storage not initialized. Call init_care_storage() first.")
    return _care_storage
