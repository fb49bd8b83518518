"""Primary-key parsing for ids that arrive as path or body strings."""

from uuid import UUID


def parse_uuid(value) -> UUID | None:
    """UUID for ``value``, or None when it is not a valid id."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, AttributeError):
        return None
