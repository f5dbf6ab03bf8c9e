from __future__ import annotations

import logging
import math
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from business_tools.api_routes import router as api_router
from business_tools.core.logging import configure_logging
from business_tools.core.rate_limit import SlidingWindowLimiter
from business_tools.core.settings import Settings
from business_tools.routes.info import API_VERSION, AVAILABLE_ENDPOINTS
from business_tools.services.agent import AnalysisAgent
from business_tools.services.llm_client import CompletionClient, LLMConfig, build_llm

logger = logging.getLogger(__name__)


def _build_default_llm(settings: Settings) -> CompletionClient:
    return build_llm(
        LLMConfig(
            provider=settings.llm_provider,
            model=settings.llm_model,
            openai_api_key=settings.OPENAI_API_KEY,
            gemini_api_key=settings.GEMINI_API_KEY,
        )
    )


def create_app(settings: Optional[Settings] = None, llm: Optional[CompletionClient] = None) -> FastAPI:
    settings = settings or Settings()
    if llm is None:
        llm = _build_default_llm(settings)

    app = FastAPI(title="Business Tools API", version=API_VERSION)
    app.state.settings = settings
    app.state.agent = AnalysisAgent(settings, llm)
    app.state.limiter = SlidingWindowLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    @app.middleware("http")
    async def limit_api_requests(request: Request, call_next):
        if request.url.path.startswith("/api/"):
            client = request.client.host if request.client else "unknown"
            wait = request.app.state.limiter.hit(client)
            if wait is not None:
                minutes = max(1, settings.rate_limit_window_seconds // 60)
                return JSONResponse(
                    status_code=429,
                    content={
                        "error": "Too many requests, please try again later.",
                        "retryAfter": f"{minutes} minutes",
                    },
                    headers={"Retry-After": str(max(1, math.ceil(wait)))},
                )
        return await call_next(request)

    # outermost, so rate-limit rejections carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # unknown paths and unsupported methods both answer with the endpoint listing
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content={"error": "Endpoint not found", "availableEndpoints": AVAILABLE_ENDPOINTS},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Request body must be valid JSON"})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": "INTERNAL_ERROR"},
        )

    app.include_router(api_router)
    return app


def run():
    import uvicorn

    settings = Settings()
    configure_logging(settings.log_level)
    logger.info("Business Tools API running on port %s", settings.port)
    logger.info("Ready to serve SWOT analyses, messaging frameworks, and more!")
    uvicorn.run(
        "business_tools.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
