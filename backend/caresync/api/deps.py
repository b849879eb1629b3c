"""
Shared API dependencies.
"""

from typing import Optional

from ..config import settings
from ..core import CareManager, get_care_manager
from ..llm import LLMProvider, create_llm_provider
from ..storage import CareStorage, get_care_storage


def get_llm_provider() -> Optional[LLMProvider]:
    """Get configured LLM provider or None."""
    return create_llm_provider(
        provider=settings.llm_provider,
        api_key=settings.llm_api_key or "",
        model=settings.llm_model,
        base_url=settings.llm_base_url,
    )


def care_manager() -> CareManager:
    return get_care_manager()


def care_storage() -> CareStorage:
    return get_care_storage()
