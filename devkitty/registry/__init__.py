"""Registry — in-memory store of validated DKF icons and their metadata."""

from devkitty.registry.models import IconRecord, MetadataBlock, ParsedDocument
from devkitty.registry.store import IconRegistry

__all__ = ["IconRecord", "IconRegistry", "MetadataBlock", "ParsedDocument"]
