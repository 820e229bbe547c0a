"""
Check digit utilities for EAN/UPC codes.

All EAN/UPC symbologies share the same mod-10 scheme: digits are weighted
3, 1, 3, 1, ... starting from the rightmost data digit.
"""


def calculate_mod10_checksum(digits: str) -> int:
    """
    Calculate the EAN/UPC check digit for a run of data digits.

    Algorithm:
    1. Multiply the rightmost digit and every second digit to its left by 3
    2. Multiply the remaining digits by 1
    3. Sum all results
    4. Checksum = (10 - (sum mod 10)) mod 10
    """
    if not digits:
        raise ValueError("Code must have at least one digit")

    total = 0
    for i, digit in enumerate(reversed(digits)):
        if not digit.isdigit():
            raise ValueError(f"Invalid character in code: {digit}")
        weight = 3 if i % 2 == 0 else 1
        total += int(digit) * weight

    return (10 - (total % 10)) % 10


def calculate_ean13_checksum(code: str) -> int:
    """Calculate EAN-13 checksum digit from the first 12 digits."""
    if len(code) < 12:
        raise ValueError("Code must have at least 12 digits for EAN-13")
    return calculate_mod10_checksum(code[:12])


def calculate_ean8_checksum(code: str) -> int:
    """Calculate EAN-8 checksum digit from the first 7 digits."""
    if len(code) < 7:
        raise ValueError("Code must have at least 7 digits for EAN-8")
    return calculate_mod10_checksum(code[:7])


def calculate_upca_checksum(code: str) -> int:
    """Calculate UPC-A checksum digit from the first 11 digits."""
    if len(code) < 11:
        raise ValueError("Code must have at least 11 digits for UPC-A")
    return calculate_mod10_checksum(code[:11])


def _validate(code: str, length: int) -> bool:
    if len(code) != length or not code.isdigit():
        return False
    return calculate_mod10_checksum(code[:-1]) == int(code[-1])


def validate_ean13_checksum(code: str) -> bool:
    """
    Validate EAN-13 checksum.

    Args:
        code: 13-digit EAN code

    Returns:
        True if checksum is valid
    """
    return _validate(code, 13)


def validate_ean8_checksum(code: str) -> bool:
    """
    Validate EAN-8 checksum.

    Args:
        code: 8-digit EAN code

    Returns:
        True if checksum is valid
    """
    return _validate(code, 8)


def validate_upc_checksum(code: str) -> bool:
    """
    Validate UPC-A checksum.

    Args:
        code: 12-digit UPC-A code

    Returns:
        True if checksum is valid
    """
    return _validate(code, 12)
