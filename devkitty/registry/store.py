"""In-memory icon registry.

Holds the current metadata block and the mapping of icon name to
``IconRecord``. ``clear``, ``register``, ``replace`` and ``merge`` are the
only mutators; nothing is evicted implicitly. The store has no locking:
a single owner is expected to drive all loads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from devkitty.registry.models import IconRecord, MetadataBlock, ParsedDocument

logger = logging.getLogger(__name__)


class IconRegistry:
    """Current metadata plus icon name → record mapping."""

    def __init__(self) -> None:
        self._icons: dict[str, IconRecord] = {}
        self._meta: MetadataBlock | None = None

    @property
    def meta(self) -> MetadataBlock | None:
        return self._meta

    @property
    def icons(self) -> dict[str, IconRecord]:
        """A copy of the current mapping."""
        return dict(self._icons)

    def register(self, icon: IconRecord) -> None:
        self._icons[icon.name] = icon

    def get(self, name: str) -> IconRecord | None:
        return self._icons.get(name)

    def names(self) -> list[str]:
        return list(self._icons)

    def clear(self) -> None:
        """Reset to the empty state with no metadata."""
        self._icons = {}
        self._meta = None

    def replace(self, document: ParsedDocument) -> None:
        """Discard all state and install a freshly parsed document."""
        self._icons = dict(document.icons)
        self._meta = document.meta
        logger.debug("Registry replaced: %d icons", len(self._icons))

    def merge(self, document: ParsedDocument) -> None:
        """Add a parsed document over the existing icons.

        Same-named icons from ``document`` win. Metadata is not merged:
        the document's metadata becomes current.
        """
        self._icons = {**self._icons, **document.icons}
        self._meta = document.meta
        logger.debug(
            "Registry merged %d icons (%d total)", len(document.icons), len(self._icons)
        )

    def to_dict(self) -> dict:
        return {
            "meta": self._meta.to_dict() if self._meta else None,
            "icons": {name: icon.to_dict() for name, icon in self._icons.items()},
        }

    def __contains__(self, name: object) -> bool:
        return name in self._icons

    def __len__(self) -> int:
        return len(self._icons)

    def __iter__(self) -> Iterator[IconRecord]:
        return iter(list(self._icons.values()))
