"""Domain exceptions raised by the CareSync core and agents."""


class CareSyncError(Exception):
    """Base class for CareSync domain errors."""


class DoseNotFoundError(CareSyncError, LookupError):
    """No dose with the given id exists in the working list."""

    def __init__(self, dose_id: str):
        super().__init__(f"Dose not found: {dose_id}")
        self.dose_id = dose_id


class MedicationNotFoundError(CareSyncError, LookupError):
    """No medication with the given id exists."""

    def __init__(self, medication_id: str):
        super().__init__(f"Medication not found: {medication_id}")
        self.medication_id = medication_id


class ExtractionError(CareSyncError):
    """Prescription image could not be turned into structured data."""
