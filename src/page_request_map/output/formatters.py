"""
Base formatter and formatter registry.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional

from page_request_map.config import OutputConfig

if TYPE_CHECKING:
    from page_request_map.models.descriptor import ServiceGroupMap
    from page_request_map.models.report import PageRequestReport


class BaseFormatter(ABC):
    """
    Abstract base class for output formatters.

    Subclasses must implement format() and format_services() methods.
    """

    def __init__(self, config: Optional[OutputConfig] = None) -> None:
        """
        Initialize the formatter.

        Args:
            config: Output options; defaults apply when omitted.
        """
        self.config = config or OutputConfig()

    def page_data(
        self,
        report: "PageRequestReport",
        omit_empty: bool = False,
    ) -> dict[str, list[dict[str, Any]]]:
        """
        Convert a report into plain page -> request dicts.

        Args:
            report: The report to convert.
            omit_empty: Leave out pages without requests.

        Returns:
            Page display path -> list of {name, method, url}.
        """
        return {
            entry.page: [descriptor.model_dump() for descriptor in entry.requests]
            for entry in report.entries
            if entry.requests or not omit_empty
        }

    def service_data(self, service_map: "ServiceGroupMap") -> dict[str, dict[str, Any]]:
        """Convert a service map into plain nested dicts."""
        return {
            group: {name: descriptor.model_dump() for name, descriptor in functions.items()}
            for group, functions in service_map.items()
        }

    @abstractmethod
    def format(self, report: "PageRequestReport") -> str:
        """
        Format a page request report.

        Args:
            report: The report to format.

        Returns:
            Formatted string representation.
        """
        pass

    @abstractmethod
    def format_services(self, service_map: "ServiceGroupMap") -> str:
        """
        Format an extracted service map.

        Args:
            service_map: Group name -> function name -> descriptor.

        Returns:
            Formatted string representation.
        """
        pass


# Formatter registry
_FORMATTERS: dict[str, type[BaseFormatter]] = {}


def register_formatter(name: str) -> Callable[[type[BaseFormatter]], type[BaseFormatter]]:
    """
    Decorator to register a formatter.

    Args:
        name: The name to register the formatter under.

    Returns:
        Decorator function.
    """
    def decorator(cls: type[BaseFormatter]) -> type[BaseFormatter]:
        _FORMATTERS[name] = cls
        return cls
    return decorator


def available_formatters() -> list[str]:
    """Names of all registered formatters."""
    _load_formatters()
    return list(_FORMATTERS)


def get_formatter(name: str, config: Optional[OutputConfig] = None) -> BaseFormatter:
    """
    Get a formatter instance by name.

    Args:
        name: The formatter name (e.g., "json", "module", "yaml", "text").
        config: Output options passed to the formatter.

    Returns:
        An instance of the requested formatter.

    Raises:
        ValueError: If the formatter name is not recognized.
    """
    _load_formatters()

    if name not in _FORMATTERS:
        available = ", ".join(_FORMATTERS.keys())
        raise ValueError(f"Unknown formatter: {name}. Available: {available}")

    return _FORMATTERS[name](config)


def _load_formatters() -> None:
    """Import formatter modules so they register themselves."""
    from page_request_map.output import (  # noqa: F401
        json_output,
        module_output,
        text_output,
        yaml_output,
    )
