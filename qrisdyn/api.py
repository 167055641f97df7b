"""FastAPI application for qrisdyn."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from .config import settings
from .errors import QRISError
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware, route_path
from .monitoring import metrics_payload, record_service_error
from .qris_encoder import field_name
from .schemas import DynamicQRRequest, DynamicQRResponse, FieldSchema, InspectRequest, InspectResponse
from .services.errors import ServiceError
from .services.generator import PaymentCodeGenerator
from .services.scan import ScanService

app = FastAPI(title="qrisdyn", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)

logger = logging.getLogger("qrisdyn.api")

INSPECT_PATH = "/v1/qris/inspect"


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key":
        logger.warning("api key is using the default value", extra={"config_key": "api_key"})
    if not settings.merchant.base_payload:
        logger.warning(
            "no merchant base payload configured; requests must supply one",
            extra={"config_key": "merchant.base_payload"},
        )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    _warn_insecure_defaults()


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    path = route_path(request)
    logger.warning(
        "service error",
        extra={"code": exc.code, "path": path, "method": request.method},
    )
    record_service_error(exc.code, path)
    return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": exc.message})


@app.exception_handler(QRISError)
async def qris_error_handler(request: Request, exc: QRISError) -> JSONResponse:
    path = route_path(request)
    logger.warning(
        "payment code error",
        extra={"code": exc.code, "path": path, "method": request.method, "detail": exc.message, **exc.details()},
    )
    record_service_error(exc.code, path)
    message = "Cannot read payment code" if path == INSPECT_PATH else "Cannot generate payment code"
    return JSONResponse(status_code=422, content={"code": exc.code, "message": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled exception",
        extra={"path": route_path(request), "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post("/v1/qris/dynamic", response_model=DynamicQRResponse, tags=["qris"], dependencies=[Depends(require_api_key)])
async def generate_dynamic(payload: DynamicQRRequest) -> DynamicQRResponse:
    generator = PaymentCodeGenerator(settings.merchant)
    result = generator.create(payload.amount, base_payload=payload.merchant_payload, render=payload.render)

    return DynamicQRResponse(
        payload=result.encoded.payload,
        crc=result.encoded.crc,
        amount=result.amount_text,
        qr_png_base64=result.qr_png_base64,
    )


@app.post(INSPECT_PATH, response_model=InspectResponse, tags=["qris"], dependencies=[Depends(require_api_key)])
async def inspect_payload(payload: InspectRequest) -> InspectResponse:
    result = ScanService().inspect(payload.payload)

    return InspectResponse(
        fields=[
            FieldSchema(tag=field.tag, name=field_name(field.tag), length=field.length, value=field.value)
            for field in result.payload
        ],
        crc_valid=result.crc_valid,
        expected_crc=result.expected_crc,
        point_of_initiation=result.point_of_initiation,
        amount=result.amount,
        merchant_name=result.merchant_name,
    )
