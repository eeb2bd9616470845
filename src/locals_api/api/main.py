from fastapi import APIRouter

from locals_api.api.routes import auth, products, translations, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(products.router)
api_router.include_router(translations.router)
