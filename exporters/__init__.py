"""Exporters for converting dependency trees to various output formats."""

from .text_exporter import to_text
from .ascii_exporter import to_ascii
from .json_exporter import to_json

__all__ = ["to_text", "to_ascii", "to_json"]
