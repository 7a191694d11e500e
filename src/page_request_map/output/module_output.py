"""
TypeScript module output formatter.

Produces a developer-readable module for iterative rebuilds:

    const PAGE_REQUEST_MAP = {
      "/Profile": [
        {
          "name": "getUser",
          "method": "GET",
          "url": "/api/user",
        },
      ],
    }
    export { PAGE_REQUEST_MAP }
"""

import json
from typing import Any

from page_request_map.models.descriptor import ServiceGroupMap
from page_request_map.models.report import PageRequestReport
from page_request_map.output.formatters import BaseFormatter, register_formatter

INDENT = 2


def render_literal(value: Any, depth: int = 0) -> str:
    """
    Render a value as a JS literal with trailing commas.

    Args:
        value: Nested dicts, lists, strings, numbers, booleans or None.
        depth: Current nesting depth.

    Returns:
        The literal text, without a trailing newline.
    """
    pad = " " * (INDENT * (depth + 1))
    closing = " " * (INDENT * depth)

    if isinstance(value, dict):
        if not value:
            return "{}"
        lines = [
            f"{pad}{json.dumps(str(key), ensure_ascii=False)}: {render_literal(item, depth + 1)},"
            for key, item in value.items()
        ]
        return "{\n" + "\n".join(lines) + f"\n{closing}}}"

    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        lines = [f"{pad}{render_literal(item, depth + 1)}," for item in value]
        return "[\n" + "\n".join(lines) + f"\n{closing}]"

    return json.dumps(value, ensure_ascii=False)


def render_module(name: str, value: Any) -> str:
    """Render a module exporting one constant."""
    return f"const {name} = {render_literal(value)}\nexport {{ {name} }}\n"


@register_formatter("module")
class ModuleFormatter(BaseFormatter):
    """
    Format output as a TypeScript module.
    """

    def format(self, report: PageRequestReport) -> str:
        """Format a page request report as a module exporting PAGE_REQUEST_MAP."""
        data = self.page_data(report, omit_empty=self.config.omit_empty)
        return render_module("PAGE_REQUEST_MAP", data)

    def format_services(self, service_map: ServiceGroupMap) -> str:
        """Format a service map as a module exporting SERVICE_MAP."""
        return render_module("SERVICE_MAP", self.service_data(service_map))
