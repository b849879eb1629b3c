"""API module."""

from .medications import router as medications_router
from .doses import router as doses_router
from .vitals import router as vitals_router
from .assistant import router as assistant_router

__all__ = ['medications_router', 'doses_router', 'vitals_router', 'assistant_router']
