"""Domain services."""

from .attachment_service import AttachmentService, ObjectStorage
from .base import Service
from .comment_service import CommentService
from .event_broadcaster import EventBroadcaster, Subscription
from .search_service import SearchBackend, SearchService

__all__ = [
    "AttachmentService",
    "CommentService",
    "EventBroadcaster",
    "ObjectStorage",
    "SearchBackend",
    "SearchService",
    "Service",
    "Subscription",
]
