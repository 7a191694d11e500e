"""
Page Request Map

Statically computes which backend API calls every page of a front-end
application depends on, by walking the local module-import graph from each
page down to the declared service modules.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("page-request-map")
except PackageNotFoundError:
    __version__ = "0.1.0"

from page_request_map.analyzer.page_request import PageRequestResolver
from page_request_map.config import Config, load_config
from page_request_map.models.descriptor import ApiDescriptor
from page_request_map.models.report import PageEntry, PageRequestReport

# Public API exports
__all__ = [
    "__version__",
    "ApiDescriptor",
    "Config",
    "PageEntry",
    "PageRequestReport",
    "PageRequestResolver",
    "load_config",
]
