from typing import Optional
import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from research_assistant.api import deps
from research_assistant.core.ai.config import get_service_config
from research_assistant.core.ai.research_service import ResearchService
from research_assistant.core.config import settings
from research_assistant.core.exceptions import (
    ExtractionError,
    RequestValidationError,
    ResearchAssistantError,
    UnsupportedFileTypeError,
)
from research_assistant.core.extraction import extract_text_async, is_supported
from research_assistant.schemas.research import (
    ErrorResponse,
    HealthResponse,
    ProcessingRequest,
    ProcessingResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "/process",
    response_model=ProcessingResponse,
    responses={400: {"model": ErrorResponse}},
)
async def process_content(
    request: ProcessingRequest,
    service: ResearchService = Depends(deps.get_research_service),
):
    """
    Run a text operation (summarize, translate, keywords, ...) on the given content.
    """
    logger.info(f"Process request (operation: {request.operation}, style: {request.summary_style})")
    service.validate(request.operation, request.content)
    result = await service.process(request.operation, request.content, request.target_language)
    return {"result": result}

@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    operation: str = Form("abstract"),
    summary_style: str = Form("ai_summary", alias="summaryStyle"),
    target_language: str = Form("en", alias="targetLanguage"),
    service: ResearchService = Depends(deps.get_research_service),
):
    """
    Extract text from an uploaded .txt, .pdf or .docx file and process it.
    """
    if file is None or not file.filename:
        raise RequestValidationError("No file uploaded")

    logger.info(f"Received upload: {file.filename} (operation: {operation}, style: {summary_style})")

    if not is_supported(file.filename):
        raise UnsupportedFileTypeError(file.filename)

    if file.size is not None and file.size > settings.MAX_UPLOAD_BYTES:
        raise RequestValidationError("Uploaded file is too large")

    try:
        data = await file.read()
        if len(data) > settings.MAX_UPLOAD_BYTES:
            raise RequestValidationError("Uploaded file is too large")

        extracted = await extract_text_async(file.filename, data)
        if extracted is None:
            raise ExtractionError(f"Failed to extract text from {file.filename}")

        service.validate(operation, extracted)
        result = await service.process(operation, extracted, target_language)
        return UploadResponse(extracted_text=extracted, result=result)
    except ResearchAssistantError:
        raise
    except Exception as e:
        logger.exception(f"Upload processing failed for {file.filename}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Failed to process file: {e}"}
        )

@router.get("/health", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check(service: ResearchService = Depends(deps.get_research_service)):
    """
    Check that the AI endpoint is configured and reachable.
    Returns 503 if it is not.
    """
    healthy = await service.client.health_check()
    health_status = {
        "status": "healthy" if healthy else "degraded",
        "services": {
            "gemini": {"status": "healthy" if healthy else "unhealthy"},
            "config": get_service_config(service.client.config),
        },
    }
    if not healthy:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status)
    return health_status
