"""
Conversions applied to scanned codes before lookup.
"""

from scan_detail.barcode.checksum import calculate_mod10_checksum, calculate_upca_checksum
from scan_detail.errors import FormatError

SYMBOLOGY_LABEL_PREFIX = "label-type-"

UPCE0 = "upce0"
UPCE = "upce"


def strip_symbology_prefix(label: str) -> str:
    """
    Remove the scanner's ``label-type-`` prefix from a symbology label.

    Raises:
        FormatError: If the label does not start with the prefix
    """
    if not label.startswith(SYMBOLOGY_LABEL_PREFIX):
        raise FormatError(f"Symbology label missing '{SYMBOLOGY_LABEL_PREFIX}' prefix: {label}")
    return label[len(SYMBOLOGY_LABEL_PREFIX) :]


def append_checksum(code: str) -> str:
    """Append the mod-10 check digit to a run of digits."""
    if not code.isdigit():
        raise FormatError(f"Code contains non-numeric characters: {code}")
    return code + str(calculate_mod10_checksum(code))


def normalize_upce0(symbology: str, code: str) -> tuple[str, str]:
    """
    Reclassify a UPC-E0 scan as UPC-E and complete short codes.

    A 6-character code is missing its check digit, which is appended.
    Codes of any other length are returned unchanged.

    Args:
        symbology: Symbology label with the scanner prefix already removed
        code: Scanned code

    Returns:
        Tuple of (symbology, code)
    """
    if symbology != UPCE0:
        return symbology, code

    if len(code) == 6:
        code = append_checksum(code)
    return UPCE, code


def ean8_to_upca(code: str) -> str:
    """
    Expand an 8-digit zero-suppressed code to 12-digit UPC-A.

    The code is number system + six payload digits + check digit. The last
    payload digit decides where the suppressed zeros go:

    - 0, 1, 2: manufacturer ``d1 d2 d6 0 0``, product ``0 0 d3 d4 d5``
    - 3: manufacturer ``d1 d2 d3 0 0``, product ``0 0 0 d4 d5``
    - 4: manufacturer ``d1 d2 d3 d4 0``, product ``0 0 0 0 d5``
    - 5-9: manufacturer ``d1 d2 d3 d4 d5``, product ``0 0 0 0 d6``

    The UPC-A check digit is recomputed from the expanded digits.

    Raises:
        FormatError: If the code is not exactly 8 digits
    """
    if len(code) != 8 or not code.isdigit():
        raise FormatError(f"Expected 8 digits, got: {code}")

    number_system = code[0]
    d1, d2, d3, d4, d5, d6 = code[1:7]

    if d6 in "012":
        body = d1 + d2 + d6 + "0000" + d3 + d4 + d5
    elif d6 == "3":
        body = d1 + d2 + d3 + "00000" + d4 + d5
    elif d6 == "4":
        body = d1 + d2 + d3 + d4 + "00000" + d5
    else:
        body = d1 + d2 + d3 + d4 + d5 + "0000" + d6

    upca = number_system + body
    return upca + str(calculate_upca_checksum(upca))
