"""API router configuration."""

from fastapi import APIRouter

from src.modules.catalog.interfaces.router import account_router
from src.modules.catalog.interfaces.router import router as catalog_router

api_router = APIRouter()

# Catalog listing, counts and deletion
api_router.include_router(catalog_router)

# Account pages
api_router.include_router(account_router)
