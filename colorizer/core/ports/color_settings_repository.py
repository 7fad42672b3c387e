# colorizer/core/ports/color_settings_repository.py
from typing import Mapping, Optional, Protocol, Sequence

from colorizer.core.domain.models import ColorRule, RuleStore

class IColorSettingsRepository(Protocol):
    """
    Port for durable storage of whole rule stores, keyed by a collection name.
    Implementations: FileSystemColorSettingsRepository.

    Storage problems are never raised to the caller: saving is best-effort
    and loading degrades to "no data".
    """

    def save(self, name: str, store: Mapping[str, Sequence[ColorRule]]) -> bool:
        """
        Serializes every rule set in `store` under `name`, replacing any
        previous value.

        Returns:
            True if the data reached storage, False if the write failed.
        """
        ...

    def load(self, name: str) -> Optional[RuleStore]:
        """
        Reads and decodes the rule store saved under `name`.

        Returns:
            The decoded store (predicates recompiled), or None if nothing
            usable is stored.
        """
        ...

    def exists(self, name: str) -> bool:
        """Returns True if a value is stored under `name`."""
        ...

    def delete(self, name: str) -> bool:
        """Removes the value stored under `name`. Returns True if one was removed."""
        ...
