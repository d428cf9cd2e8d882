from fastapi import APIRouter

from localization.api.routes import glossary, i18n

api_router = APIRouter()
api_router.include_router(i18n.router)
api_router.include_router(glossary.router)
