"""
AI Services Configuration

Configuration settings for the hosted generative-AI endpoint, including the
endpoint URL, credentials and the retry policy used around rate limiting.
"""

from typing import Dict, Any
from pydantic_settings import BaseSettings


class AIServiceConfig(BaseSettings):
    """Configuration for the Gemini gateway."""

    # Endpoint Configuration
    api_url: str = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    api_key: str = ""
    request_timeout: float = 30.0

    # Retry Settings
    max_attempts: int = 3
    initial_backoff: float = 2.0  # seconds
    backoff_multiplier: float = 2.0

    # Processing Settings
    default_language: str = "en"
    strict_operations: bool = False

    # Health Check Settings
    health_check_timeout: float = 5.0

    class Config:
        env_prefix = "GEMINI_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global configuration instance
ai_config = AIServiceConfig()


def get_service_config(config: AIServiceConfig = None) -> Dict[str, Any]:
    """Get service configuration dictionary with credentials redacted."""
    if config is None:
        config = ai_config
    return {
        "gemini": {
            "url": config.api_url,
            "api_key_configured": bool(config.api_key),
            "timeout": config.request_timeout
        },
        "retry": {
            "max_attempts": config.max_attempts,
            "initial_backoff": config.initial_backoff,
            "backoff_multiplier": config.backoff_multiplier
        },
        "processing": {
            "default_language": config.default_language,
            "strict_operations": config.strict_operations
        }
    }
