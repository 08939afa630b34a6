from fastapi import APIRouter

from rolehub.api.routers import roles

api_router = APIRouter()

api_router.include_router(roles.router)
