"""
Script to run the backend server with uvicorn using the configured
host, port and reload settings.
"""

import uvicorn

from research_assistant.core.config import settings


def main():
    print(f"Starting {settings.PROJECT_NAME} on {settings.HOST}:{settings.PORT}...")
    uvicorn.run(
        "research_assistant.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
