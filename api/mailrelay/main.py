import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mailrelay.config import settings
from mailrelay.handler import EmailForwardingHandler, InboundRequest
from mailrelay.middleware import RequestSizeLimitMiddleware
from mailrelay.response import ResponseSink

API_VERSION = "0.1.0"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

relay_logger = logging.getLogger("relay")

app = FastAPI(
    title="MailRelay",
    description="Forward email-send requests to SendGrid and relay the provider's response.",
    version=API_VERSION,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# CORS
_cors_origins = (
    [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if settings.cors_origins
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestSizeLimitMiddleware)

handler = EmailForwardingHandler()


# --- Exception Handlers ---


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.status_code, "message": exc.detail}},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    relay_logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": {"code": 500, "message": "Internal server error"}},
    )


# --- Routes ---


async def _read_body(request: Request):
    """Parse body — try JSON first, then form-encoded, else empty."""
    content_type = request.headers.get("content-type", "")
    try:
        return await request.json()
    except Exception:
        pass
    if "application/x-www-form-urlencoded" in content_type or "multipart/form-data" in content_type:
        try:
            form = await request.form()
            return {k: v for k, v in form.items() if isinstance(v, str)}
        except Exception:
            relay_logger.debug("Unparseable form body", exc_info=True)
    return {}


@app.api_route(
    "/",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    summary="Send an email via SendGrid",
)
async def send_email(request: Request):
    inbound = InboundRequest(
        method=request.method,
        query=dict(request.query_params),
        body=await _read_body(request) if request.method == "POST" else {},
    )
    sink = ResponseSink()
    await handler.handle(inbound, sink)
    return sink.to_response()


@app.get("/health", summary="Health check")
async def health_ping():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION,
    }
