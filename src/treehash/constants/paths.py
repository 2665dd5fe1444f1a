"""Platform path constants."""

from __future__ import annotations

LONG_PATH_PREFIX: str = "\\\\?\\"
LONG_PATH_UNC_PREFIX: str = "\\\\?\\UNC\\"
UNC_PREFIX: str = "\\\\"
