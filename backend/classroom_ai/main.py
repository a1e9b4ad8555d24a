import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .db import Base, engine
from .deps import close_gateway
from . import models  # noqa: F401  registers ORM tables
from .errors import ConfigurationError
from .settings import settings
from .routers import health
from .routers import actions

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

app = FastAPI(title="Classroom AI Assistant API")
app.include_router(health.router)
app.include_router(actions.router)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
	logger.error("Configuration error on %s: %s", request.url.path, exc)
	return JSONResponse(status_code=500, content={"status": "failed", "message": f"Service is not configured: {exc}", "detail": {}})


@app.get("/info")
def root():
	return {"status": "ok", "llm_configured": bool(settings.openai_api_key)}


@app.on_event("startup")
async def startup_event():
	# Initialize DB schema for the SQL progress log
	Base.metadata.create_all(bind=engine)


@app.on_event("shutdown")
def shutdown_event():
	close_gateway()


def run() -> None:
	import uvicorn
	uvicorn.run("classroom_ai.main:app", host=settings.host, port=settings.port)
