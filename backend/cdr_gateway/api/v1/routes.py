"""
API Router
Combines all endpoint routers
"""
from fastapi import APIRouter
from cdr_gateway.api.v1.endpoints import cdr

api_router = APIRouter()

# CDR ingestion and listing
api_router.include_router(cdr.router)
