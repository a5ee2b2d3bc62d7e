"""Resource parsing utilities for CPU, memory and quantity values.

Provides functions to parse Kubernetes resource strings and render them back:
- Quantities: parsed with ``kubernetes.utils.parse_quantity``
- CPU: displayed as millicores or cores
- Memory: displayed in 1024-based units
- Canonical Kubernetes form ("1k", "500m", "1Gi")
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Any

from kubernetes.utils import parse_quantity

# Binary suffixes, largest first, for canonical rendering.
_BINARY_SI_SUFFIXES: tuple[tuple[str, int], ...] = (
    ("Ei", 1024**6),
    ("Pi", 1024**5),
    ("Ti", 1024**4),
    ("Gi", 1024**3),
    ("Mi", 1024**2),
    ("Ki", 1024),
)

# Largest suffix first; canonical form picks the first exact fit.
_DECIMAL_SI_SUFFIXES: tuple[tuple[int, str], ...] = (
    (18, "E"),
    (15, "P"),
    (12, "T"),
    (9, "G"),
    (6, "M"),
    (3, "k"),
    (0, ""),
    (-3, "m"),
    (-6, "u"),
    (-9, "n"),
)


def quantity_value(value: Any) -> Decimal:
    """Parse a resource quantity ("250m", "1.5", "512Mi", "128M") to a Decimal.

    Empty or unparseable input reads as zero.
    """
    if value is None or value == "" or isinstance(value, bool):
        return Decimal(0)
    try:
        return parse_quantity(str(value).strip())
    except (ValueError, InvalidOperation):
        return Decimal(0)


def cpu_millicores(value: Any) -> int:
    """CPU quantity in whole millicores ("1.5" -> 1500, "250000000n" -> 250)."""
    return int((quantity_value(value) * 1000).to_integral_value())


def memory_bytes(value: Any) -> int:
    """Memory quantity in bytes ("1Ki" -> 1024, "1k" -> 1000)."""
    return int(quantity_value(value).to_integral_value())


def format_cpu(millicores: float) -> str:
    """Render CPU usage: "<n>m" below one core, "<cores>.xx" from one core up."""
    millicores = max(0, int(millicores))
    if millicores < 1000:
        return f"{millicores}m"
    return f"{millicores / 1000:.2f}"


def format_memory(num_bytes: float) -> str:
    """Render a byte count in 1024-based units with one decimal."""
    num_bytes = max(0, int(num_bytes))
    if num_bytes < 1024:
        return f"{num_bytes}B"
    if num_bytes < 1024**2:
        return f"{num_bytes / 1024:.1f}Ki"
    if num_bytes < 1024**3:
        return f"{num_bytes / 1024**2:.1f}Mi"
    return f"{num_bytes / 1024**3:.1f}Gi"


def _format_decimal_si(quantity: Decimal) -> str:
    if quantity == 0:
        return "0"
    for exponent, suffix in _DECIMAL_SI_SUFFIXES:
        scaled = quantity.scaleb(-exponent)
        if scaled == scaled.to_integral_value():
            return f"{int(scaled)}{suffix}"
    # Sub-nano precision rounds up to the smallest representable unit.
    return f"{int(quantity.scaleb(9).to_integral_value(rounding=ROUND_CEILING))}n"


def format_quantity(value: Any) -> str:
    """Render a resource quantity in canonical Kubernetes form.

    Decimal quantities use the largest SI suffix that keeps an integral
    mantissa (1000 -> "1k", 0.5 -> "500m"). Quantities written with a binary
    suffix keep binary form when at least 1024 and integral ("1024Mi" -> "1Gi").
    Unparseable input is returned unchanged as a string.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, bool):
        return str(value)
    text = str(value).strip()
    try:
        quantity = parse_quantity(text)
    except (ValueError, InvalidOperation):
        return text

    is_binary = any(text.endswith(suffix) for suffix, _ in _BINARY_SI_SUFFIXES)
    if is_binary and abs(quantity) >= 1024 and quantity == quantity.to_integral_value():
        amount = int(quantity)
        for suffix, mult in _BINARY_SI_SUFFIXES:
            if amount % mult == 0:
                return f"{amount // mult}{suffix}"
        return str(amount)
    return _format_decimal_si(quantity)


def to_int(value: Any, default: int = 0) -> int:
    """Decode an untyped numeric field that may arrive as int, float or string."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default
