"""API route handlers."""

from .jobs import router as jobs_router
from .chats import router as chats_router
from .ws import router as ws_router
