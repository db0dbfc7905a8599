"""
FastAPI Server for the Loop Video Service.

This module builds the HTTP application: middleware, error envelopes,
health check and the video routes.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from ..core.config import Config
from ..core.logging_config import get_error_tracker
from ..video.integration import VideoModule
from ..video.presentation.schemas import HealthResponse


DEFAULT_ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "FILE_TOO_LARGE",
    422: "VALIDATION_ERROR",
}


def error_body(message: str, error: str) -> dict:
    return {"success": False, "message": message, "error": error}


class APIServer:
    """FastAPI server for the Loop Video Service"""

    def __init__(self, config: Config, video_module: Optional[VideoModule] = None):
        self.config = config
        self.video_module = video_module or VideoModule(config)
        self.logger = logging.getLogger(__name__)
        self.access_logger = logging.getLogger("loop_video.api.access")
        self.error_tracker = get_error_tracker("api")

        self.app = FastAPI(title="Loop Video API", description="Upload, stream and split short videos", version="1.0.0")

        self.app.add_middleware(CORSMiddleware, allow_origins=config.server.cors_origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"], expose_headers=["Content-Range", "Accept-Ranges", "Content-Length", "Content-Disposition"])
        self.app.middleware("http")(self._access_log_middleware)

        self._setup_exception_handlers()
        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes"""

        @self.app.get("/api/health", response_model=HealthResponse)
        async def health_check():
            return HealthResponse(status="OK", timestamp=datetime.now(timezone.utc))

        @self.app.get("/api/status")
        async def get_status():
            """Wiring of the video module"""
            status = self.video_module.get_module_status()
            status["unhandled_errors"] = self.error_tracker.error_count
            return {"success": True, "data": status}

        self.app.include_router(self.video_module.get_api_routes())

    def _setup_exception_handlers(self):
        """Render every error as a {success, message, error} envelope"""

        @self.app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(request: Request, exc: StarletteHTTPException):
            if isinstance(exc.detail, dict):
                body = error_body(exc.detail.get("message", ""), exc.detail.get("error", "ERROR"))
            elif exc.status_code == 404 and exc.detail == "Not Found":
                body = error_body("Endpoint not found", "NOT_FOUND")
            else:
                body = error_body(str(exc.detail), DEFAULT_ERROR_CODES.get(exc.status_code, "ERROR"))
            return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))

        @self.app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError):
            errors = exc.errors()
            message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
            return JSONResponse(status_code=422, content=error_body(message, "VALIDATION_ERROR"))

        @self.app.exception_handler(Exception)
        async def unhandled_exception_handler(request: Request, exc: Exception):
            self.error_tracker.log_error(exc, f"{request.method} {request.url.path}")
            return JSONResponse(status_code=500, content=error_body("Internal server error", "INTERNAL_ERROR"))

    async def _access_log_middleware(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        client = request.client.host if request.client else "-"
        self.access_logger.info(f"{client} {request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms")
        return response

    def run(self) -> None:
        """Run the uvicorn server (blocking)"""
        self.logger.info(f"Loop Video API listening on {self.config.server.host}:{self.config.server.port}")
        self.logger.info(f"Upload directory: {self.config.storage.upload_dir}")
        uvicorn.run(self.app, host=self.config.server.host, port=self.config.server.port, log_level="info")


def create_app(config: Optional[Config] = None, video_module: Optional[VideoModule] = None) -> FastAPI:
    """Build the FastAPI application"""
    config = config or Config()
    return APIServer(config, video_module).app
