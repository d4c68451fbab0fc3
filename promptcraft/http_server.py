"""HTTP facade for PromptCraft."""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
import yaml
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from . import __version__
from .engine.entities import extract_story_elements
from .engine.models import RequestType
from .engine.orchestrator import EnhancementOrchestrator
from .tools import enhance_prompt_tool
from .utils.exceptions import PromptValidationError
from .utils.llm_client import LLMClient
from .utils.logging_config import setup_logging
from .utils.store import KeyValueStore, RateLimiter, UsageRecorder, create_store

setup_logging()

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = (
    "https://promtcraft.in,https://www.promtcraft.in,"
    "http://localhost:3000,http://localhost:8080"
)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

ENTITY_TYPES = (RequestType.CREATIVE_WRITING, RequestType.POETRY)


# Pydantic models for requests/responses
class EnhanceRequest(BaseModel):
    # Emptiness and length are checked by the orchestrator so the error codes match
    prompt: Optional[str] = Field(default=None, description="The raw prompt to enhance")
    tone: Optional[str] = Field(default=None, description="professional|casual|academic|creative|technical")
    length: Optional[str] = Field(default=None, description="concise|balanced|detailed")
    model: Optional[str] = Field(default=None, description="Target model family", max_length=100)
    detailLevel: Optional[str] = Field(default=None, description="architecture|full_code")
    useLlm: bool = Field(default=True, description="Polish the template with the configured LLM")

    @field_validator("tone", "length", "model", "detailLevel", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Optional[str]:
        if v is None or not isinstance(v, str) or not v.strip():
            return None
        return v


class ClassifyRequest(BaseModel):
    prompt: Optional[str] = Field(default=None, description="The raw prompt to classify")


class HealthResponse(BaseModel):
    status: str
    version: str
    llm: Dict[str, Any]
    rate_limit_enabled: bool
    usage_logging_enabled: bool


# Global instances
llm_client: Optional[LLMClient] = None
store: Optional[KeyValueStore] = None
rate_limiter: Optional[RateLimiter] = None
usage_recorder: Optional[UsageRecorder] = None
orchestrator: Optional[EnhancementOrchestrator] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    global llm_client, store, rate_limiter, usage_recorder, orchestrator

    # Startup
    logger.info("Starting PromptCraft HTTP facade...")
    llm_client = LLMClient()
    store = create_store()
    await store.initialize()
    rate_limiter = RateLimiter(store)
    usage_recorder = UsageRecorder(store)
    orchestrator = EnhancementOrchestrator()
    logger.info(
        "LLM provider: %s, rate limiting: %s",
        llm_client.provider.value,
        "on" if rate_limiter.enabled else "off",
    )

    yield

    # Shutdown
    logger.info("Shutting down PromptCraft HTTP facade...")
    await llm_client.close()
    await store.close()
    llm_client = store = rate_limiter = usage_recorder = orchestrator = None


app = FastAPI(
    title="PromptCraft HTTP API",
    description="""
    ## Prompt Enhancement API

    Turns a rough prompt into a structured, type-aware prompt for AI models.

    - Rule-based classification into twelve request types
    - Deterministic templates, optionally polished by an LLM
    - Per-client rate limiting
    """,
    version=__version__,
    license_info={"name": "MIT License", "url": "https://opensource.org/licenses/MIT"},
    openapi_tags=[
        {"name": "prompts", "description": "Prompt enhancement and classification"},
        {"name": "health", "description": "Health checks and status"},
    ],
    lifespan=lifespan,
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


cors_origins_env = os.getenv("HTTP_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(PromptValidationError)
async def prompt_validation_handler(request: Request, exc: PromptValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc), "code": exc.code})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body: %s", exc.errors())
    return JSONResponse(
        status_code=400, content={"error": "Invalid request body", "code": "INVALID_REQUEST"}
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "code": "INTERNAL_ERROR"},
    )


def client_ip(request: Request) -> str:
    """First hop of X-Forwarded-For, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else "unknown"


def _require_services() -> None:
    if not orchestrator or not rate_limiter or not usage_recorder:
        raise HTTPException(status_code=503, detail="Service not initialized")


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        llm=llm_client.get_performance_stats() if llm_client else {},
        rate_limit_enabled=rate_limiter.enabled if rate_limiter else False,
        usage_logging_enabled=usage_recorder.enabled if usage_recorder else False,
    )


@app.post("/v1/enhance-prompt", tags=["prompts"])
async def enhance_prompt(body: EnhanceRequest, request: Request):
    """Enhance a prompt, rate limited per client IP."""
    _require_services()
    ip = client_ip(request)

    decision = await rate_limiter.check(ip)
    if not decision.allowed:
        return JSONResponse(
            status_code=429,
            content={
                "error": "Too many requests. Please try again later.",
                "code": "RATE_LIMITED",
                "retryAfter": decision.retry_after,
            },
            headers={"Retry-After": str(decision.retry_after)},
        )

    result = await enhance_prompt_tool(
        arguments=body.model_dump(),
        llm_client=llm_client,
        cache=store,
        orchestrator=orchestrator,
    )

    metadata = result["metadata"]
    await usage_recorder.record(
        ip,
        input_length=metadata["inputLength"],
        output_length=metadata["outputLength"],
        request_type=metadata["requestType"],
        source=metadata["source"],
    )
    return JSONResponse(content=result)


@app.post("/v1/classify", tags=["prompts"])
async def classify_prompt(body: ClassifyRequest):
    """Classify a prompt without generating a template."""
    _require_services()
    normalized = orchestrator.normalizer.normalize(orchestrator.validate(body.prompt))
    intent = orchestrator.classifier.classify(normalized)
    payload = intent.to_dict()
    if intent.type in ENTITY_TYPES:
        payload["elements"] = extract_story_elements(normalized).to_dict()
    return payload


@app.get("/openapi.yaml", include_in_schema=False)
async def openapi_yaml():
    """Serve OpenAPI schema in YAML."""
    schema = app.openapi()
    content = yaml.safe_dump(schema, sort_keys=False, allow_unicode=True)
    return Response(content=content, media_type="application/yaml")


def run_http_server(host: Optional[str] = None, port: Optional[int] = None):
    """Run the HTTP server."""
    uvicorn.run(
        "promptcraft.http_server:app",
        host=host or os.getenv("HTTP_HOST", "127.0.0.1"),
        port=port or int(os.getenv("HTTP_PORT", "8080")),
        reload=os.getenv("RELOAD", "false").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    run_http_server()
