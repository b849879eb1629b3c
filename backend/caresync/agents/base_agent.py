"""
Base Agent Class - Shared LLM plumbing for the CareSync AI agents.
"""

import json
import logging
import re
from typing import Dict, Any, Optional, List, Sequence

from ..llm.base import LLMProvider, LLMMessage
from ..models import Medication, VitalRecord

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


def parse_json_reply(text: str) -> Any:
    """
    Parse a model reply as JSON, tolerating a surrounding markdown code fence.

    Raises:
        ValueError: If the reply is not valid JSON
    """
    return json.loads(_CODE_FENCE.sub("", text.strip()))


class BaseAgent:
    """
    Base class for all AI agents.
    Holds the system prompt and an optional LLM provider.
    """

    def __init__(self, name: str, system_prompt: str, llm_provider: Optional[LLMProvider] = None):
        """
        Initialize base agent.

        Args:
            name: Agent name
            system_prompt: System prompt for the agent
            llm_provider: Provider to call; agents degrade gracefully without one
        """
        self.name = name
        self.system_prompt = system_prompt
        self._llm_provider: Optional[LLMProvider] = llm_provider

    @property
    def has_llm(self) -> bool:
        return self._llm_provider is not None

    def set_llm_provider(self, provider: Optional[LLMProvider]) -> None:
        self._llm_provider = provider

    def format_context(
        self,
        medications: Sequence[Medication] = (),
        vitals: Sequence[VitalRecord] = (),
    ) -> str:
        """
        Format the user's medications and vitals for prompt injection.

        Returns:
            Formatted context string, empty when there is nothing to share
        """
        if not medications and not vitals:
            return ""

        meds_json = json.dumps([m.model_dump(mode="json", exclude={"color"}) for m in medications], ensure_ascii=False)
        vitals_json = json.dumps([v.model_dump(mode="json", exclude={"id"}) for v in vitals], ensure_ascii=False)

        return (
            "\n## User Context\n"
            f"### Medications\n{meds_json}\n\n"
            f"### Recent Vitals\n{vitals_json}\n"
        )

    async def call_llm(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        image_base64_list: Optional[List[Dict[str, str]]] = None,
        json_response: bool = False,
    ) -> str:
        """
        Call the configured LLM. Returns a placeholder if none is configured.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Temperature for generation
            image_base64_list: Optional list of dicts with 'data' and 'media_type',
                attached to the last user message
            json_response: Ask for a JSON object reply

        Returns:
            LLM response text

        Raises:
            Exception: Whatever the provider raised, after logging it
        """
        if self._llm_provider is None:
            return (
                f"[LLM not configured for {self.name}. "
                f"Set LLM_API_KEY and LLM_PROVIDER in environment to enable AI responses.]"
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Agent {self.name} calling LLM: {len(messages)} messages, "
                f"temperature={temperature}, has_images={bool(image_base64_list)}"
            )

        llm_messages: List[LLMMessage] = []
        for msg in messages:
            if msg["role"] == "user" and image_base64_list and msg is messages[-1]:
                llm_messages.append(
                    LLMMessage.multimodal(msg["role"], msg["content"], image_base64_list=image_base64_list)
                )
            else:
                llm_messages.append(LLMMessage.text(msg["role"], msg["content"]))

        try:
            response = await self._llm_provider.chat_completion(
                llm_messages, temperature=temperature, json_response=json_response
            )
        except Exception as e:
            logger.error(
                f"Agent {self.name} LLM call failed: {str(e)}",
                exc_info=True,
                extra={"extra_fields": {"agent": self.name, "error": str(e)}}
            )
            raise

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Agent {self.name} received LLM response: length={len(response.content)} chars")

        return response.content
