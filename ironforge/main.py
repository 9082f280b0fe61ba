from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from . import __version__
from .config import settings
from .logging_config import configure_logging
from .routers import calculate, preview, profiles, quote, suggest, window_grid
from .units import ConfigError

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("ironforge")

app = FastAPI(
    title="IronForge Configurator",
    description="Gate, grill and aluminium window configurator with weight-based quotations",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConfigError)
def config_error_handler(request: Request, exc: ConfigError):
    logger.warning("Rejected configuration on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# API routes
app.include_router(profiles.router, prefix="/api")
app.include_router(calculate.router, prefix="/api")
app.include_router(preview.router, prefix="/api")
app.include_router(window_grid.router, prefix="/api")
app.include_router(quote.router, prefix="/api")
app.include_router(suggest.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "ironforge", "version": __version__}
