# wodtracker/api.py
from fastapi import APIRouter

from wodtracker.analytics.router import router as analytics_router
from wodtracker.auth.router import router as auth_router
from wodtracker.scores.router import router as scores_router
from wodtracker.users.router import router as users_router
from wodtracker.wods.router import router as wods_router

api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(wods_router, prefix="/wods", tags=["wods"])
# Mounted ahead of the score routes so /scores/stats/{id} is not read as a score id
api_router.include_router(analytics_router, prefix="/scores", tags=["analytics"])
api_router.include_router(scores_router, prefix="/scores", tags=["scores"])
