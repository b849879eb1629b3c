"""
Prescription Agent - Reads medications and vitals from a prescription photo.
Uses a multimodal LLM in JSON mode and normalises its reply into domain models.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

from ..core.errors import ExtractionError
from ..core.vitals import classify_vital
from ..models import ExtractionResult, Medication, VitalRecord, VitalSource
from .base_agent import BaseAgent, parse_json_reply

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General Health"
DEFAULT_GENERAL_USE = "Consult your doctor for details."
DEFAULT_COLOR = "bg-blue-500"

# First matching rule wins
CATEGORY_COLORS = [
    (("antibiotic", "bacterial", "infection"), "bg-cyan-500"),
    (("pain", "inflammatory", "nsaid", "headache"), "bg-rose-500"),
    (("allergy", "cold", "histamine", "cough"), "bg-purple-500"),
    (("cardio", "heart", "blood pressure", "hypertension"), "bg-red-500"),
    (("diabetes", "glucose", "sugar", "insulin"), "bg-emerald-500"),
    (("vitamin", "supplement", "mineral"), "bg-amber-500"),
    (("stomach", "gastric", "acid", "digest"), "bg-orange-500"),
    (("asthma", "respiratory", "lung"), "bg-sky-500"),
    (("anxiety", "sleep", "depress", "mental"), "bg-indigo-500"),
]


def category_color(category: Optional[str]) -> str:
    """Pick a display color for a drug category by keyword."""
    lowered = (category or "").lower()
    for keywords, color in CATEGORY_COLORS:
        if any(keyword in lowered for keyword in keywords):
            return color
    return DEFAULT_COLOR


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


class PrescriptionAgent(BaseAgent):
    """
    Extracts structured medication and vitals data from prescription images.
    """

    def __init__(self, llm_provider=None):
        system_prompt = """You are an expert medical transcription AI for CareSync.
You read photos of prescriptions and clinic notes and return structured JSON.

Return a single JSON object with exactly these keys:
{
  "medications": [
    {
      "name": str, "dosage": str, "frequency": str, "instructions": str,
      "duration": str, "times": [str], "generalUse": str, "category": str
    }
  ],
  "vitals": [
    {"type": str, "value": str, "unit": str}
  ]
}

Rules:
- "times" values must be from: "Morning", "Afternoon", "Evening", "Night", "As Needed".
  Infer them from the frequency (e.g. "1-0-1" -> ["Morning", "Night"], "SOS" -> ["As Needed"]).
- "generalUse" is a short layman explanation (e.g. "Commonly used to lower cholesterol").
- "category" is the drug class (e.g. "Statin", "Antibiotic", "Pain reliever").
- Vital "type" must be one of: "Blood Pressure", "Blood Sugar", "Heart Rate", "Weight", "SpO2", "Temperature".
  Keep blood pressure as "systolic/diastolic". Infer the unit from the type if it is missing.
- If a handwritten name is unclear, give your best guess and add "(unclear)" to it.
- Use empty arrays when nothing is found. Do not add commentary outside the JSON.
"""
        super().__init__("PrescriptionAgent", system_prompt, llm_provider)

    async def extract(
        self,
        image_base64: str,
        media_type: str = "image/png",
        now: Optional[datetime] = None,
    ) -> ExtractionResult:
        """
        Extract medications and vitals from a base64-encoded prescription image.

        Args:
            image_base64: Image content, base64 encoded
            media_type: MIME type of the image
            now: Timestamp for extracted vitals (defaults to the current time)

        Returns:
            ExtractionResult: New medications (fresh ids) and classified vitals

        Raises:
            ExtractionError: If no LLM is configured, the call fails, or the reply is unusable
        """
        if not self.has_llm:
            raise ExtractionError("LLM provider not configured; cannot analyze prescriptions")

        try:
            reply = await self.call_llm(
                messages=[
                    {"role": "system", "content": self.system_prompt},
                    {"role": "user", "content": "Analyze this prescription image."},
                ],
                temperature=0.2,
                image_base64_list=[{"data": image_base64, "media_type": media_type}],
                json_response=True,
            )
        except Exception as e:
            raise ExtractionError("Failed to analyze prescription") from e

        try:
            data = parse_json_reply(reply)
        except ValueError as e:
            raise ExtractionError("Prescription analysis returned invalid JSON") from e
        if not isinstance(data, dict):
            raise ExtractionError("Prescription analysis returned an unexpected shape")

        timestamp = now or datetime.now()
        medications = self._build_medications(data.get("medications") or [])
        vitals = self._build_vitals(data.get("vitals") or [], timestamp)

        logger.info(
            "Prescription extracted",
            extra={"extra_fields": {"medications": len(medications), "vitals": len(vitals)}}
        )
        return ExtractionResult(medications=medications, vitals=vitals)

    def _build_medications(self, raw_meds: List[Any]) -> List[Medication]:
        medications = []
        for raw in raw_meds:
            if not isinstance(raw, dict) or not _text(raw.get("name")):
                logger.warning(f"Skipping unreadable medication entry: {raw!r}")
                continue

            times = raw.get("times") or []
            if isinstance(times, str):
                times = [times]
            category = _text(raw.get("category")) or DEFAULT_CATEGORY

            medications.append(Medication(
                name=_text(raw.get("name")),
                dosage=_text(raw.get("dosage")),
                frequency=_text(raw.get("frequency")),
                instructions=_text(raw.get("instructions")),
                duration=_text(raw.get("duration")) or None,
                times=[_text(t) for t in times if _text(t)],
                category=category,
                color=category_color(category),
                general_use=_text(raw.get("generalUse") or raw.get("general_use")) or DEFAULT_GENERAL_USE,
            ))
        return medications

    def _build_vitals(self, raw_vitals: List[Any], timestamp: datetime) -> List[VitalRecord]:
        vitals = []
        for raw in raw_vitals:
            if not isinstance(raw, dict):
                continue
            vital_type, value = _text(raw.get("type")), _text(raw.get("value"))
            if not vital_type or not value:
                logger.warning(f"Skipping incomplete vital entry: {raw!r}")
                continue

            vitals.append(VitalRecord(
                type=vital_type,
                value=value,
                unit=_text(raw.get("unit")),
                timestamp=timestamp,
                status=classify_vital(vital_type, value),
                source=VitalSource.EXTRACTED,
            ))
        return vitals

