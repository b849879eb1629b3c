"""
Assistant API endpoints - Chat and health summary reports.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status
from typing import Optional

from ..agents import AssistantAgent, ReportAgent
from ..core import CareManager
from ..llm import LLMProvider
from ..models import ChatReply, ChatRequest, SummaryReport
from ..storage import CareStorage
from .deps import care_manager, care_storage, get_llm_provider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assistant", tags=["assistant"])

# Only the most recent vitals are sent as chat/report context
CONTEXT_VITALS = 20


@router.post("/chat", response_model=ChatReply)
async def chat(
    request: ChatRequest,
    manager: CareManager = Depends(care_manager),
    storage: CareStorage = Depends(care_storage),
    llm_provider: Optional[LLMProvider] = Depends(get_llm_provider),
):
    """
    Ask the assistant a question with medications and vitals in context.
    """
    medications = await manager.get_medications()
    vitals = (await storage.get_vitals())[:CONTEXT_VITALS]

    try:
        reply = await AssistantAgent(llm_provider).chat(
            request.message, medications, vitals, request.history
        )
    except Exception as e:
        logger.error(f"Assistant chat failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Assistant is unavailable right now."
        )

    return ChatReply(content=reply)


@router.get("/report", response_model=SummaryReport)
async def get_report(
    manager: CareManager = Depends(care_manager),
    storage: CareStorage = Depends(care_storage),
    llm_provider: Optional[LLMProvider] = Depends(get_llm_provider),
):
    """Summary report for all medications and recent vitals."""
    medications = await manager.get_medications()
    vitals = (await storage.get_vitals())[:CONTEXT_VITALS]
    return await ReportAgent(llm_provider).generate(medications, vitals)

