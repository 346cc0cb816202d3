"""Domain enumerations for the EarProbe media service.

Enums represent fixed sets of domain values (e.g. storage tier).
"""

from enum import Enum


class StorageKind(str, Enum):
    """Storage tier that holds the authoritative bytes of an image.

    REMOTE is the primary object store (CDN-served); LOCAL is the
    filesystem fallback on the serving host.
    """

    REMOTE = "remote"
    LOCAL = "local"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid storage kinds as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [kind.value for kind in cls]
