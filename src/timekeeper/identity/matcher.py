"""Name matching between ClickUp and Slack."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from timekeeper.config import ConfigError

_WHITESPACE = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Lower-case a person name and strip all whitespace.

    "Jane Doe", " jane  doe " and "JaneDoe" all normalize to "janedoe".
    """
    return _WHITESPACE.sub("", name).lower()


def names_match(a: str, b: str) -> bool:
    """Return True if two person names are equal after normalization."""
    return normalize_name(a) == normalize_name(b)


class IdentityMap:
    """Static mapping of ClickUp names to Slack identities and space managers.

    Lookups on the ClickUp-name side ignore case and whitespace. Space names
    are matched exactly, the same way tracked spaces are.
    """

    def __init__(
        self,
        identities: Mapping[str, str],
        managers: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        """Initialize the identity map.

        Args:
            identities: ClickUp person name -> Slack identity.
            managers: Space name -> ordered manager person names.

        Raises:
            ConfigError: If two ClickUp names normalize to the same key.
        """
        self._identities: dict[str, str] = {}
        seen: dict[str, str] = {}
        for name, identity in identities.items():
            key = normalize_name(name)
            if key in seen:
                raise ConfigError(
                    f"Ambiguous identity mapping: '{seen[key]}' and '{name}' "
                    "are the same name after normalization"
                )
            seen[key] = name
            self._identities[key] = identity
        self._managers = {space: list(names) for space, names in (managers or {}).items()}

    def resolve_identity(self, name: str) -> str | None:
        """Resolve a ClickUp person name to its Slack identity, or None."""
        return self._identities.get(normalize_name(name))

    def managers_for(self, space_name: str) -> list[str]:
        """Return the configured manager names for a space (possibly empty)."""
        return list(self._managers.get(space_name, []))

    @property
    def spaces_with_managers(self) -> list[str]:
        """Spaces that have at least one manager configured."""
        return [space for space, names in self._managers.items() if names]

    def __len__(self) -> int:
        return len(self._identities)
