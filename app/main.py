"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.core.logging import setup_logging
from app.api import health, orders, menu
from app.api.webhooks import menu as menu_webhooks


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    yield
    # Shutdown
    pass


app = FastAPI(
    title="Voice Order Matcher",
    description="Matches spoken food orders against restaurant menus",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(menu_webhooks.router, prefix="/webhooks", tags=["webhooks"])
app.include_router(orders.router, tags=["orders"])
app.include_router(menu.router, tags=["menu"])


@app.get("/")
async def root():
    """Service banner."""
    return {
        "message": "Voice Order Matcher API",
        "version": "0.1.0",
    }
