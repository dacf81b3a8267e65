"""
API Routers
"""

from fastapi import APIRouter
from app.api.v1.endpoints import accounts, transactions, expenses, savings, goals, bills, auth, categories

# Versioned resources, mounted under settings.API_V1_STR
api_router = APIRouter()

api_router.include_router(
    accounts.router,
    prefix="/accounts",
    tags=["accounts"]
)

api_router.include_router(
    transactions.router,
    prefix="/transactions",
    tags=["transactions"]
)

api_router.include_router(
    expenses.router,
    prefix="/expenses",
    tags=["expenses"]
)

api_router.include_router(
    savings.router,
    prefix="/savings",
    tags=["savings"]
)

api_router.include_router(
    goals.router,
    prefix="/goals",
    tags=["goals"]
)

api_router.include_router(
    bills.router,
    prefix="/bills",
    tags=["bills"]
)

# Unversioned resources, mounted at the root
public_router = APIRouter()

public_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"]
)

public_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["categories"]
)
