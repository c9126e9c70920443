"""DKF — the DevKitty icon format.

A DKF document is a ``@meta { ... }`` block followed by an ``@icons { ... }``
block. Each icon declares a ``viewBox:`` and one or more quoted SVG path
strings inside ``paths { ... }``.
"""

FORMAT_NAME = "devkitty"
DOCUMENT_TYPE = "icon"
MODES = ("single", "package")

REQUIRED_META = ("format", "version", "type", "mode", "iconCount")

META_SECTION = "@meta"
ICONS_SECTION = "@icons"
ICON_KEYWORD = "icon"
VIEWBOX_KEY = "viewBox:"
PATHS_KEY = "paths"

OPEN_BRACE = "{"
CLOSE_BRACE = "}"
QUOTE = '"'
