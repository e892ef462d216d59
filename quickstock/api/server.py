# quickstock/api/server.py
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prometheus_fastapi_instrumentator import Instrumentator
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from quickstock.obs.logging_config import setup_logging
from ..config import get_settings
from ..intelligence.providers import select_provider
from ..routes_forecast import router as forecast_router
from ..routes_intelligence import router as intelligence_router
from ..routes_sales import router as sales_router

# ----------------- Bootstrap -----------------
settings = get_settings()
app = FastAPI(title="QuickStock AI API")

# CORS so the dashboard can call it
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- Observability ----
setup_logging()
if os.getenv("SENTRY_DSN"):
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        integrations=[FastApiIntegration()],
        traces_sample_rate=float(os.getenv("SENTRY_TRACES", "0.0")),
    )
if os.getenv("PROMETHEUS_ENABLE", "0") == "1":
    Instrumentator().instrument(app).expose(app, include_in_schema=False, endpoint="/metrics")

# ----------------- Errors -----------------
# Every error body is {"error": ...}, including bodies FastAPI cannot parse.
@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(status_code=400, content={"error": f"'{field}': {message}" if field else message})

# ----------------- Routes -----------------
app.include_router(sales_router)
app.include_router(forecast_router)
app.include_router(intelligence_router)

# ----------------- Misc -----------------
@app.get("/")
def root():
    return {"message": "QuickStock AI API", "try": ["/docs", "/health", "/info"]}

@app.get("/health")
@app.get("/api/v1/health")
def health():
    return {"status": "ok", "message": "QuickStock AI API is running"}

@app.get("/info")
def info():
    s = get_settings()
    return {
        "provider": select_provider(s).label,
        "bedrock_model": s.bedrock_model_id,
        "gemini_model": s.gemini_model,
        "aws_region": s.aws_region,
        "aws_ready": s.has_aws_credentials,
    }
