#!/usr/bin/env python3
"""
Chat errors.

Every error carries a stable code so clients can tell a bad request from a
permission problem or a missing resource. Errors are reported to the
originating connection only.
"""


class ChatError(Exception):
    """Base exception for rejected chat events."""
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ChatValidationError(ChatError):
    """Missing or malformed event payload."""
    code = "validation"


class ChatAuthorizationError(ChatError):
    """Caller may not perform this operation (not a participant, wrong role)."""
    code = "authorization"


class ChatNotFoundError(ChatError):
    """Referenced room, job or user does not exist."""
    code = "not_found"
