"""Marker base for domain services."""


class Service:
    """Base for the board's domain services.

    Services own the rules around comments, attachments, search and events.
    They depend on repository and adapter interfaces only.
    """
