"""
Barcode symbology conversion and checksum utilities.
"""

from scan_detail.barcode.checksum import (
    calculate_ean8_checksum,
    calculate_ean13_checksum,
    calculate_mod10_checksum,
    calculate_upca_checksum,
    validate_ean8_checksum,
    validate_ean13_checksum,
    validate_upc_checksum,
)
from scan_detail.barcode.converter import (
    append_checksum,
    ean8_to_upca,
    normalize_upce0,
    strip_symbology_prefix,
)
from scan_detail.barcode.symbology import (
    Rotation,
    Symbology,
    map_symbology_name,
    symbology_choices,
    symbology_display_name,
    symbology_index,
)

__all__ = [
    "Rotation",
    "Symbology",
    "append_checksum",
    "calculate_ean8_checksum",
    "calculate_ean13_checksum",
    "calculate_mod10_checksum",
    "calculate_upca_checksum",
    "ean8_to_upca",
    "map_symbology_name",
    "normalize_upce0",
    "strip_symbology_prefix",
    "symbology_choices",
    "symbology_display_name",
    "symbology_index",
    "validate_ean8_checksum",
    "validate_ean13_checksum",
    "validate_upc_checksum",
]
