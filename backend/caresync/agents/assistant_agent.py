"""
Assistant Agent - Context-aware chat about the user's schedule and health stats.
"""

from typing import Sequence

from ..models import ChatTurn, Medication, VitalRecord
from .base_agent import BaseAgent


class AssistantAgent(BaseAgent):
    """
    Answers questions with the user's medications and vitals in context.
    """

    def __init__(self, llm_provider=None):
        system_prompt = """You are CareSync Assistant.

Rules:
1. Answer questions about the medication schedule and health stats.
2. If vitals are high or low, be helpful but cautious. Suggest general wellness tips
   (e.g. hydration) but ALWAYS tell them to see a doctor for medical advice.
3. Keep answers concise.
"""
        super().__init__("AssistantAgent", system_prompt, llm_provider)

    async def chat(
        self,
        message: str,
        medications: Sequence[Medication],
        vitals: Sequence[VitalRecord],
        history: Sequence[ChatTurn] = (),
    ) -> str:
        """
        Reply to a chat message.

        Args:
            message: The user's new message
            medications: Current medication list
            vitals: Recent vitals
            history: Previous turns of this conversation, oldest first

        Returns:
            Assistant reply text
        """
        system = self.system_prompt + self.format_context(medications, vitals)
        messages = [{"role": "system", "content": system}]
        messages.extend({"role": turn.role, "content": turn.content} for turn in history)
        messages.append({"role": "user", "content": message})

        return await self.call_llm(messages, temperature=0.5)
