from fastapi import APIRouter

from winajaya.api.routes_auth import router as auth_router
from winajaya.api.routes_branches import router as branches_router
from winajaya.api.routes_users import router as users_router

api_router = APIRouter()

api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(branches_router, prefix="/branches", tags=["branches"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
