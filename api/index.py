"""
Storefront Guest Cart - FastAPI Application

Single entry point for the guest cart API.
"""
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.logging import get_logger
from storefront.routers import guest_cart_router

logger = get_logger(__name__)

ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("STOREFRONT_ORIGINS", "*").split(",")
    if origin.strip()
]

app = FastAPI(
    title="Storefront Guest Cart",
    description="Cart for anonymous shoppers with merge-on-login",
    version="1.0.0",
)

# The storefront is served from a different origin than this API
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(guest_cart_router, prefix="/api")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront-guest-cart"}
