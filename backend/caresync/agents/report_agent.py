"""
Report Agent - Summarises medications and vitals for the patient and their caregiver.
"""

import logging
from typing import Sequence

from ..models import Medication, SummaryReport, VitalRecord
from .base_agent import BaseAgent, parse_json_reply

logger = logging.getLogger(__name__)

FALLBACK_REPORT = SummaryReport(
    summary="Could not generate summary.",
    risk_flags=[],
    caregiver_note="Please review the list manually.",
)


class ReportAgent(BaseAgent):
    """
    Builds a plain-language health summary with risk flags.
    Never fails: any problem yields the fallback report.
    """

    def __init__(self, llm_provider=None):
        system_prompt = """You are the CareSync health summary assistant.

Given a patient's medications and recent vitals, reply with a JSON object:
{"summary": str, "riskFlags": [str], "caregiverNote": str}

- "summary": a short patient-facing summary. If vitals are abnormal (e.g. high blood
  pressure), mention it in simple terms.
- "riskFlags": concrete things to act on (e.g. "High BP detected - check with doctor about salt intake").
  Use an empty list when nothing stands out.
- "caregiverNote": a brief note for the person helping the patient.

You are not a doctor. Do not change or recommend doses.
"""
        super().__init__("ReportAgent", system_prompt, llm_provider)

    async def generate(
        self,
        medications: Sequence[Medication],
        vitals: Sequence[VitalRecord],
    ) -> SummaryReport:
        """
        Generate a summary report for the given medications and vitals.

        Returns:
            SummaryReport: Generated report, or FALLBACK_REPORT on any failure
        """
        if not self.has_llm:
            return FALLBACK_REPORT

        try:
            reply = await self.call_llm(
                messages=[
                    {"role": "system", "content": self.system_prompt},
                    {"role": "user", "content": f"Analyze this health data:{self.format_context(medications, vitals)}"},
                ],
                temperature=0.3,
                json_response=True,
            )
            data = parse_json_reply(reply)
            return SummaryReport(
                summary=data.get("summary") or FALLBACK_REPORT.summary,
                risk_flags=[str(flag) for flag in data.get("riskFlags") or data.get("risk_flags") or []],
                caregiver_note=data.get("caregiverNote") or data.get("caregiver_note") or "",
            )
        except Exception as e:
            logger.warning(f"Health report generation failed, using fallback: {e}", exc_info=True)
            return FALLBACK_REPORT
