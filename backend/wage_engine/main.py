from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wage_engine.api.routes import health
from wage_engine.core.config import settings
from wage_engine.core.errors import Unavailable, WageEngineError
from wage_engine.core.logging import configure_logging, get_logger
from wage_engine.core.monitoring import configure_error_monitoring, report_unavailable
from wage_engine.core.observability import configure_observability
from wage_engine.domains.wages.router import router as wages_router
from wage_engine.domains.wages.templates import build_template_registry

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)
app.state.templates = build_template_registry()
app.state.template_code = settings.municipality_template

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.cors_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(wages_router)


@app.exception_handler(WageEngineError)
async def wage_engine_error_handler(request: Request, exc: WageEngineError) -> JSONResponse:
    if isinstance(exc, Unavailable):
        logger.error("storage_unavailable", path=request.url.path, exc_info=exc.__cause__ or exc)
        report_unavailable(exc)
    else:
        logger.info("request_rejected", path=request.url.path, error=exc.code, message=exc.message)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "statusCode": exc.status_code,
            "message": exc.message,
            "error": type(exc).__name__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
        },
    )


@app.on_event("startup")
def startup_event() -> None:
    logger.info(
        "startup_complete",
        env=settings.env,
        templates=sorted(app.state.templates),
        template=app.state.template_code,
    )


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Wage settlement API running", "environment": settings.env}
