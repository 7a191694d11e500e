"""
Output package for Page Request Map.

This package contains formatters for serializing page request maps and
service maps in various formats (JSON, TypeScript module, YAML, text).
"""

from page_request_map.output.formatters import (
    BaseFormatter,
    available_formatters,
    get_formatter,
)
from page_request_map.output.json_output import JsonFormatter
from page_request_map.output.module_output import ModuleFormatter
from page_request_map.output.text_output import TextFormatter
from page_request_map.output.yaml_output import YamlFormatter

__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "ModuleFormatter",
    "TextFormatter",
    "YamlFormatter",
    "available_formatters",
    "get_formatter",
]
