"""
AI Research Services

This module provides the generative-AI side of the research assistant:
- Prompt templates for each text operation
- A Gemini gateway with retry and backoff on rate limiting
- Response envelope parsing
- The research service that dispatches operations
"""

from .config import AIServiceConfig, ai_config, get_service_config
from .gemini_client import GeminiClient
from .prompts import Operation, build_prompt, language_name
from .research_service import ResearchService
from .response import ErrorKind, GenerationResult, extract_text

__all__ = [
    "AIServiceConfig",
    "ai_config",
    "get_service_config",
    "GeminiClient",
    "Operation",
    "build_prompt",
    "language_name",
    "ResearchService",
    "ErrorKind",
    "GenerationResult",
    "extract_text"
]
