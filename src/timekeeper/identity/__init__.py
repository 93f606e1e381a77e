"""Identity - Matches ClickUp person names to Slack identities."""

from timekeeper.identity.matcher import IdentityMap, names_match, normalize_name

__all__ = [
    "IdentityMap",
    "names_match",
    "normalize_name",
]
