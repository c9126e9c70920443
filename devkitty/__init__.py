"""DevKitty — DKF icon-pack parser and registry.

The module-level functions drive a single process-wide registry, for
callers that just want ``devkitty.load_all([...])`` then ``devkitty.get(name)``.
Code that needs its own isolated state should build an ``IconRegistry``
and a ``DKFLoader`` directly.
"""

from devkitty.errors import DevKittyError, DKFParseError, ErrorKind, LoadError
from devkitty.loader import DKFLoader
from devkitty.registry import IconRecord, IconRegistry, MetadataBlock

__version__ = "0.1.0"

registry = IconRegistry()
_loader = DKFLoader(registry)


def parse(text: str):
    """Destructively load a DKF document into the default registry."""
    return _loader.parse(text)


def parse_append(text: str):
    """Additively load a DKF document into the default registry."""
    return _loader.parse_append(text)


def load_all(sources):
    """Fetch and additively load each source, in order."""
    return _loader.load_all(sources)


def get(name: str) -> IconRecord | None:
    return registry.get(name)


def clear() -> None:
    registry.clear()


__all__ = [
    "DKFLoader",
    "DKFParseError",
    "DevKittyError",
    "ErrorKind",
    "IconRecord",
    "IconRegistry",
    "LoadError",
    "MetadataBlock",
    "clear",
    "get",
    "load_all",
    "parse",
    "parse_append",
    "registry",
]
