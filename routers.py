from fastapi import APIRouter
from endpoints.auth import router as auth_router
from endpoints.users import router as users_router
from endpoints.portfolios import router as portfolios_router
from endpoints.holdings import router as holdings_router

api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(users_router)
api_router.include_router(portfolios_router)
api_router.include_router(holdings_router)
