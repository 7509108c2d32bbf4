import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from sitescope.config import get_settings
from sitescope.exceptions import AnalysisError, ConfigurationError, InputError, UnknownAnalysisError, safe_str
from sitescope.logger import setup_logging
from sitescope.mcp_server import mcp
from sitescope.models.common import (
    AnalysisErrorResponse,
    ErrorResponse,
    PerplexityStatus,
    StatusResponse,
)
from sitescope.routers.analysis import router as analysis_router


# --- Error boundary middleware ---

class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """Turns exceptions no handler claimed into the JSON diagnostic body."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on {} {}", request.method, request.url.path)
            return await analysis_error_handler(request, UnknownAnalysisError(safe_str(exc), exc))


# --- FastAPI app ---

api = FastAPI(title="SiteScope", version="0.1.0")
api.add_middleware(ErrorBoundaryMiddleware)
api.include_router(analysis_router)


@api.get("/api/status")
def api_status() -> StatusResponse:
    settings = get_settings()
    return StatusResponse(
        perplexity=PerplexityStatus(
            configured=bool(settings.perplexity_api_key.strip()),
            model=settings.perplexity_model,
        )
    )


# --- Exception handlers ---

@api.exception_handler(InputError)
async def input_error_handler(request: Request, exc: InputError):
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump())


@api.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


@api.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    body = AnalysisErrorResponse(details=exc.details(), debug_info=exc.debug_info())
    return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)

app = Starlette(
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=mcp_app.lifespan,
)


def run():
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        "sitescope.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
