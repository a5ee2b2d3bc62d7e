"""Utility helpers for quantity, timestamp and label handling."""

from kubeprobe.utils.resource_parser import (
    cpu_millicores,
    format_cpu,
    format_memory,
    format_quantity,
    memory_bytes,
    quantity_value,
    to_int,
)
from kubeprobe.utils.timestamps import format_age, format_rfc3339, parse_iso_timestamp

__all__ = [
    "cpu_millicores",
    "format_age",
    "format_cpu",
    "format_memory",
    "format_quantity",
    "format_rfc3339",
    "memory_bytes",
    "parse_iso_timestamp",
    "quantity_value",
    "to_int",
]
