from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as RequestBodyError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from research_assistant.api.v1.api import api_router
from research_assistant.core.ai.config import ai_config
from research_assistant.core.ai.gemini_client import GeminiClient
from research_assistant.core.ai.research_service import ResearchService
from research_assistant.core.config import settings
from research_assistant.core.exceptions import ResearchAssistantError

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the AI gateway on startup and release its session on shutdown."""
    client = GeminiClient(ai_config)
    app.state.research_service = ResearchService(client, strict_operations=ai_config.strict_operations)
    if not ai_config.api_key:
        logger.warning("GEMINI_API_KEY is not set; AI calls will be rejected upstream")
    logger.info("Research service started")
    yield
    await client.close()
    logger.info("Research service shut down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Summarize, translate and analyze text and documents with a generative-AI backend",
    version=settings.VERSION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ResearchAssistantError)
async def research_error_handler(request: Request, exc: ResearchAssistantError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestBodyError)
async def request_body_error_handler(request: Request, exc: RequestBodyError):
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Malformed request body"})


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)
