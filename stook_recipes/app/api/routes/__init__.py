from fastapi import APIRouter

from stook_recipes.app.api.routes import import_photo

api_router = APIRouter()
api_router.include_router(import_photo.router)
