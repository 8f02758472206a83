import logging

from fastapi import APIRouter, Depends, HTTPException

from stook_recipes.app.core.config import Settings, get_settings
from stook_recipes.app.schemas.ocr_import import PhotoPreviewRequest, PhotoPreviewResponse
from stook_recipes.app.services import ocr_recipe_parser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import/photo", tags=["import"])


@router.post("/preview", response_model=PhotoPreviewResponse)
def preview_photo_import(
    payload: PhotoPreviewRequest,
    settings: Settings = Depends(get_settings),
):
    if len(payload.raw_text) > settings.ocr_max_text_chars:
        logger.info(
            "Rejecting OCR preview: %d chars exceeds limit of %d",
            len(payload.raw_text),
            settings.ocr_max_text_chars,
        )
        raise HTTPException(
            status_code=413,
            detail=f"OCR text exceeds {settings.ocr_max_text_chars} characters",
        )

    parsed = ocr_recipe_parser.parse(payload.raw_text)
    overall = parsed.confidence.overall
    return PhotoPreviewResponse(
        path=payload.path,
        title=parsed.title,
        description=parsed.description,
        serves=parsed.serves,
        prep_minutes=parsed.prep_minutes,
        cook_minutes=parsed.cook_minutes,
        target_internal_temp=parsed.target_internal_temp,
        ingredients=parsed.ingredients,
        steps=parsed.steps,
        confidence=overall,
        confidence_details=parsed.confidence,
        needs_review=overall < settings.ocr_review_threshold,
    )
