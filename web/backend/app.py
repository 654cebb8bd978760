#!/usr/bin/env python3
"""
TalentLink API - FastAPI Application

Job browsing with match scores, applications and realtime employer/seeker
chat, with automatic API documentation.

Usage:
    python main.py [--config config.yaml] [--host 0.0.0.0] [--port 8080]

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
    - ws://localhost:8080/ws/chat?token=<jwt> - Chat
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException

from chat import ChatHub
from core.config_loader import AppConfig
from .config import get_config
from .dependencies import DatabaseManager
from .exceptions import (
    ServiceException,
    service_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import jobs_router, chats_router, ws_router
from .routers.jobs import add_rate_limit_handlers

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    db_manager: Optional[DatabaseManager] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Application configuration; loaded from config.yaml when omitted.
        db_manager: Database manager; built from config.database when omitted.
    """
    config = config or get_config()
    db_manager = db_manager or DatabaseManager(config.database)

    app = FastAPI(
        title="TalentLink API",
        description="Job matching and employer/seeker messaging",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.config = config
    app.state.db_manager = db_manager
    app.state.chat_hub = ChatHub(
        db_manager.SessionLocal,
        config=config.chat,
        auth_config=config.auth
    )

    # Configure rate limiting
    add_rate_limit_handlers(app)

    # Register exception handlers
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(jobs_router)
    app.include_router(chats_router)
    app.include_router(ws_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "talentlink-api",
            "online_users": len(app.state.chat_hub.registry)
        }

    return app

