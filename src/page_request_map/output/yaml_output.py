"""
YAML output formatter.
"""

import yaml

from page_request_map.models.descriptor import ServiceGroupMap
from page_request_map.models.report import PageRequestReport
from page_request_map.output.formatters import BaseFormatter, register_formatter


@register_formatter("yaml")
class YamlFormatter(BaseFormatter):
    """
    Format output as YAML.
    """

    def format(self, report: PageRequestReport) -> str:
        """Format a page request report as YAML."""
        data = {
            "timestamp": report.timestamp.isoformat(),
            "src_root": report.src_root,
            "summary": {
                "pages": report.page_count,
                "distinct_requests": report.request_count,
                "files": report.total_files,
                "service_groups": report.service_groups,
                "duration_ms": report.duration_ms,
            },
            "pages": self.page_data(report, omit_empty=self.config.omit_empty),
            "errors": report.errors,
            "warnings": report.warnings,
        }

        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def format_services(self, service_map: ServiceGroupMap) -> str:
        """Format a service map as YAML."""
        return yaml.dump(
            self.service_data(service_map),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
