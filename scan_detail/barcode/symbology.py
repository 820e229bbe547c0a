"""
Symbology enumeration and display-name mapping.
"""

from enum import Enum

from scan_detail.errors import UnknownSymbologyError


class Symbology(str, Enum):
    """Symbologies supported by the create barcode endpoint."""

    AZTEC = "aztec"
    CODABAR = "codabar"
    CODE_11 = "code11"
    CODE_39 = "code39"
    CODE_93 = "code93"
    CODE_128 = "code128"
    DATAMATRIX = "datamatrix"
    EAN_8 = "ean8"
    EAN_13 = "ean13"
    GS1_128 = "gs1-128"
    GS1_DATABAR = "databar"
    INTERLEAVED_2_OF_5 = "interleaved2of5"
    ITF_14 = "itf14"
    MAXICODE = "maxicode"
    MICRO_PDF417 = "micropdf417"
    PDF417 = "pdf417"
    QRCODE = "qrcode"
    UPC_A = "upca"
    UPC_E = "upce"


class Rotation(str, Enum):
    """Barcode image rotation."""

    NORMAL = "N"
    RIGHT = "R"
    INVERTED = "I"
    LEFT = "L"


def _compact(name: str) -> str:
    return name.replace("-", "").replace("_", "").lower()


def map_symbology_name(raw: str) -> Symbology:
    """
    Convert a display or scanner name to a Symbology.

    ``"code-128"`` maps to ``CODE_128`` by replacing hyphens with underscores.
    Names without separators (``"code128"``) are matched ignoring separators.

    Raises:
        UnknownSymbologyError: If no member matches
    """
    name = raw.strip().replace("-", "_").upper()
    if name in Symbology.__members__:
        return Symbology[name]

    compact = _compact(raw)
    if compact:
        for member in Symbology:
            if _compact(member.name) == compact:
                return member

    raise UnknownSymbologyError(raw)


def symbology_display_name(symbology: Symbology) -> str:
    """Display name for a symbology (underscores become hyphens)."""
    return symbology.name.lower().replace("_", "-")


def symbology_choices(placeholder: str) -> list[str]:
    """
    Selection list entries.

    Index 0 is the placeholder meaning "no selection"; members follow in
    declaration order.
    """
    return [placeholder] + [symbology_display_name(s) for s in Symbology]


def symbology_index(symbology: Symbology) -> int:
    """Position of a symbology in the selection list."""
    return list(Symbology).index(symbology) + 1
