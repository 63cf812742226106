import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from shared.core.config import settings
from shared.core.database import engine, Base
from shared.exception_handler import setup_exception_handlers

from . import models  # noqa: F401 registers tables on Base
from .router import property_manager_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)

app = FastAPI(title="Property Manager Service API")

# Create all tables
Base.metadata.create_all(bind=engine)

origins = [origin.strip()
           for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Include routers
app.include_router(property_manager_router.router)
