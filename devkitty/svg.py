"""Write SVG markup for a validated icon record."""

from __future__ import annotations

import base64
from xml.sax.saxutils import quoteattr

from devkitty.registry.models import IconRecord

SVG_NS = "http://www.w3.org/2000/svg"


def icon_to_svg(
    icon: IconRecord,
    *,
    size: int | float | None = None,
    color: str | None = None,
) -> str:
    """Build a standalone SVG document from ``icon.view_box`` and ``icon.paths``."""
    attrs = [f"xmlns={quoteattr(SVG_NS)}", f"viewBox={quoteattr(icon.view_box)}"]
    if size is not None:
        attrs.append(f"width={quoteattr(str(size))}")
        attrs.append(f"height={quoteattr(str(size))}")
    if color:
        attrs.append(f"fill={quoteattr(color)}")

    body = "".join(f"<path d={quoteattr(d)}/>" for d in icon.paths)
    return f"<svg {' '.join(attrs)}>{body}</svg>"


def icon_to_data_uri(icon: IconRecord, **kwargs) -> str:
    """Return the icon's SVG as a base64 ``data:`` URI."""
    svg = icon_to_svg(icon, **kwargs)
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"
