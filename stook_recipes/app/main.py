import logging
import uuid

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stook_recipes.app.api.routes import api_router
from stook_recipes.app.services.ocr_recipe_parser import OcrTextValidationError

logger = logging.getLogger(__name__)


def _validation_error_response(details: list) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error_code": "validation_error",
            "message": "Invalid request payload.",
            "details": details,
            "job_id": str(uuid.uuid4()),
        },
    )


async def validation_exception_handler(request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", []) if part is not None)
        msg = err.get("msg", "Invalid value")
        details.append({"field": loc or None, "message": msg})
    return _validation_error_response(details)


async def ocr_text_exception_handler(request, exc: OcrTextValidationError):
    logger.info("Rejected OCR text: %s", exc)
    return _validation_error_response([{"field": "body.rawText", "message": str(exc)}])


def create_app() -> FastAPI:
    app = FastAPI(title="Stook Recipes", version="0.1.0")
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(OcrTextValidationError, ocr_text_exception_handler)
    app.include_router(api_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
