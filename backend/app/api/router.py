"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import (
    auth, income, expenses, debts, account,
    calculate, settings, database, ai
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(income.router)
api_router.include_router(expenses.router)
api_router.include_router(debts.router)
api_router.include_router(account.router)
api_router.include_router(calculate.router)
api_router.include_router(settings.router)
api_router.include_router(database.router)
api_router.include_router(ai.router)
