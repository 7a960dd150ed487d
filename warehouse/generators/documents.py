"""Brazilian company registration numbers (CNPJ)."""

from __future__ import annotations

import random

FIRST_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
SECOND_WEIGHTS = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


def cnpj_check_digit(digits: list[int], weights: tuple[int, ...]) -> int:
    remainder = sum(d * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def generate_cnpj() -> str:
    """Valid 14-digit CNPJ for a head office (branch ``0001``)."""
    digits = [random.randint(0, 9) for _ in range(8)] + [0, 0, 0, 1]
    digits.append(cnpj_check_digit(digits, FIRST_WEIGHTS))
    digits.append(cnpj_check_digit(digits, SECOND_WEIGHTS))
    return "".join(str(d) for d in digits)


def format_cnpj(raw: str) -> str:
    """``12345678000195`` -> ``12.345.678/0001-95``."""
    return f"{raw[:2]}.{raw[2:5]}.{raw[5:8]}/{raw[8:12]}-{raw[12:]}"


def is_valid_cnpj(value: str) -> bool:
    """Check both verification digits of a formatted or raw CNPJ."""
    digits = [int(c) for c in value if c.isdigit()]
    if len(digits) != 14 or len(set(digits)) == 1:
        return False
    return (
        cnpj_check_digit(digits[:12], FIRST_WEIGHTS) == digits[12]
        and cnpj_check_digit(digits[:13], SECOND_WEIGHTS) == digits[13]
    )
