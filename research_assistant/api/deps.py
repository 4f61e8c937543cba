from fastapi import HTTPException, Request, status

from research_assistant.core.ai.research_service import ResearchService


def get_research_service(request: Request) -> ResearchService:
    service = getattr(request.app.state, "research_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Research service not available"
        )
    return service
