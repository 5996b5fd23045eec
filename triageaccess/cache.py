"""Caller-owned cache of values known to the service, such as profile names."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


class KnownValuesCache:
    """Load a list of values once and keep it until told otherwise.

    Each cache belongs to whoever created it; nothing is shared between
    instances and nothing expires on its own. Call ``refresh()`` to reload.

    Examples:
        >>> profiles = client.profile_cache()  # doctest: +SKIP
        >>> "windows10" in profiles  # doctest: +SKIP
        True
    """

    def __init__(self, loader: Callable[[], Iterable[str]]) -> None:
        self._loader = loader
        self._values: Optional[Tuple[str, ...]] = None

    @property
    def loaded(self) -> bool:
        return self._values is not None

    def values(self) -> Tuple[str, ...]:
        """Return the cached values, loading them on first use."""
        if self._values is None:
            self.refresh()
        return self._values  # type: ignore[return-value]

    def refresh(self) -> Tuple[str, ...]:
        """Reload the values from the loader, replacing what was cached.

        If the loader raises, the previous values are kept.
        """
        values = tuple(self._loader())
        logger.debug("Loaded %s known values", len(values))
        self._values = values
        return values

    def clear(self) -> None:
        self._values = None

    def __contains__(self, value: object) -> bool:
        return value in self.values()

    def __iter__(self):
        return iter(self.values())

    def __len__(self) -> int:
        return len(self.values())
