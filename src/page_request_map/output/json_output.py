"""
JSON output formatter.

Produces the compact machine form of the page request map that production
builds embed.
"""

import json

from page_request_map.models.descriptor import ServiceGroupMap
from page_request_map.models.report import PageRequestReport
from page_request_map.output.formatters import BaseFormatter, register_formatter


@register_formatter("json")
class JsonFormatter(BaseFormatter):
    """
    Format output as JSON.

    Pages without requests are kept so consumers can tell an analyzed page
    from an unknown one.
    """

    def _dumps(self, data: object) -> str:
        """Serialize with the configured indentation."""
        indent = self.config.indent
        if indent is None:
            return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        return json.dumps(data, indent=indent, ensure_ascii=False)

    def format(self, report: PageRequestReport) -> str:
        """Format a page request report as JSON."""
        return self._dumps(self.page_data(report))

    def format_services(self, service_map: ServiceGroupMap) -> str:
        """Format a service map as JSON."""
        return self._dumps(self.service_data(service_map))
