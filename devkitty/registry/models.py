"""Registry data models — document metadata and validated icon records."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MetadataBlock:
    """The ``@meta`` block of a DKF document, after validation."""

    format: str
    version: str
    type: str
    mode: str  # single | package
    icon_count: int

    # Any additional keys the document declared, kept verbatim
    extra: dict[str, str] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, str | int]:
        data: dict[str, str | int] = {
            "format": self.format,
            "version": self.version,
            "type": self.type,
            "mode": self.mode,
            "iconCount": self.icon_count,
        }
        data.update(self.extra)
        return data


@dataclass(frozen=True)
class IconRecord:
    """A single renderable icon: its coordinate frame plus ordered paths.

    The record is self-sufficient: a renderer needs nothing beyond
    ``view_box`` and ``paths`` to produce an SVG image.
    """

    name: str
    view_box: str  # "min-x min-y width height"
    paths: tuple[str, ...] = ()

    @property
    def view_box_values(self) -> tuple[float, float, float, float]:
        x, y, w, h = (float(v) for v in self.view_box.split())
        return x, y, w, h

    def to_dict(self) -> dict:
        return {"viewBox": self.view_box, "paths": list(self.paths)}


@dataclass
class ParsedDocument:
    """Scratch result of one parse pass, not yet committed to a registry."""

    meta: MetadataBlock
    icons: dict[str, IconRecord] = field(default_factory=dict)
    icon_blocks: int = 0  # icon blocks seen, duplicates included

    @property
    def names(self) -> list[str]:
        return list(self.icons)
