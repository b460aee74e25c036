from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import Base, engine, ensure_schema
from .indicators import INDICATOR_DEFINITIONS, validate_definitions
from .logging_config import configure_logging, get_logger
from .settings import settings
from .routers import health, legend
from .routers import evaluation
from .routers import results
from . import models  # noqa: F401  registers tables on Base.metadata

configure_logging()
log = get_logger(__name__)

app = FastAPI(title="Stability Score API")
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.origins,
	allow_credentials=True,
	allow_methods=["GET", "POST", "PUT"],
	allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(legend.router)
app.include_router(evaluation.router)
app.include_router(results.router)


@app.get("/info")
def root():
	return {
		"status": "ok",
		"email_configured": bool(settings.sendgrid_api_key),
		"weight_policy": settings.weight_policy,
	}


@app.on_event("startup")
async def startup_event():
	# Refuse to serve scores that are not a valid percentage
	if settings.weight_policy == "strict":
		validate_definitions(INDICATOR_DEFINITIONS, settings.weight_tolerance)
	# Initialize DB schema
	Base.metadata.create_all(bind=engine)
	# Apply lightweight dev migrations
	ensure_schema()
	log.info("Stability Score API started (database: %s)", engine.url.render_as_string(hide_password=True))
