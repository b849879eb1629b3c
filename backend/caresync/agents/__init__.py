"""Agents module - AI collaborators for extraction, reports and chat."""

from .base_agent import BaseAgent
from .prescription_agent import PrescriptionAgent
from .report_agent import ReportAgent
from .assistant_agent import AssistantAgent

__all__ = [
    'BaseAgent',
    'PrescriptionAgent',
    'ReportAgent',
    'AssistantAgent',
]
