"""Rendering helpers shared by the notification templates."""

PLACEHOLDER = "N/A"


def or_placeholder(value) -> str:
    """Render a payload value, substituting the placeholder when it is missing or empty."""
    if value is None or value == "" or value == []:
        return PLACEHOLDER
    return str(value)
