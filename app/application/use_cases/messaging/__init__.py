"""Messaging use cases: direct messages between identities."""

from app.application.use_cases.messaging.direct_messages import DirectMessageService

__all__ = ["DirectMessageService"]
