from fastapi import APIRouter

from money_manager.api.v1.routes import auth, categories, transactions, dashboard
from money_manager.core.auth import auth_backend, fastapi_users

api_router = APIRouter()

api_router.include_router(auth.router)
# OAuth2 password-form login, used by the interactive API docs
api_router.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["Authentication"],
)
api_router.include_router(categories.router)
api_router.include_router(transactions.router)
api_router.include_router(dashboard.router)
