"""
Constants and default values for model conversions.

This module centralizes default values and fallbacks used when converting
API responses and stored documents to models.
"""

EMPTY_STRING = ""

# Schema type recorded for a field mapping when the catalog entry has none
DEFAULT_FIELD_TYPE = "string"

# Display format for stored timestamps
DISPLAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
