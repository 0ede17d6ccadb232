"""Constants for epicat."""

from __future__ import annotations

# Directory holding the database and config, searched upward like .git
EPICAT_DIRNAME = ".epicat"

# Default database file name inside the epicat directory
DEFAULT_DB_FILENAME = "db.json"

CONFIG_FILENAME = "config.toml"

# Color mappings for status labels, keyed by Status value
STATUS_COLORS = {
    "Open": "magenta",
    "InProgress": "yellow",
    "Resolved": "green",
    "Closed": "blue",
}

# Color used for table borders and headers
CHROME_COLOR = "cyan"

SEPARATOR = "----------------------------"

# Largest ID or counter value; orjson cannot encode integers above u64
MAX_ID = 2**64 - 1
