"""
Report data models.

Models representing the result of one resolution pass.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from page_request_map.models.descriptor import ApiDescriptor


class PageEntry(BaseModel):
    """The API requests reachable from a single page."""

    page: str = Field(description="Page display path (e.g. /Profile)")
    file: str = Field(description="Display identity of the page file (e.g. @/pages/Profile.tsx)")
    requests: list[ApiDescriptor] = Field(
        default_factory=list,
        description="Deduplicated requests in first-discovery order",
    )

    @property
    def request_count(self) -> int:
        """Number of requests used by this page."""
        return len(self.requests)


class PageRequestReport(BaseModel):
    """Complete result of a resolution pass."""

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the pass was performed",
    )
    src_root: Optional[str] = Field(
        default=None,
        description="Source tree root the pass resolved against",
    )
    entries: list[PageEntry] = Field(
        default_factory=list,
        description="One entry per page display path, in discovery order",
    )
    total_files: int = Field(
        default=0,
        description="Files supplied in the declaration map",
    )
    service_groups: int = Field(
        default=0,
        description="Service groups found under the services directory",
    )
    duration_ms: Optional[float] = Field(
        default=None,
        description="How long the pass took in milliseconds",
    )
    errors: list[str] = Field(
        default_factory=list,
        description="Conditions that stopped the pass",
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Diagnostics such as ambiguous imports",
    )

    @property
    def page_request_map(self) -> dict[str, list[ApiDescriptor]]:
        """Page display path -> requests, including pages without requests."""
        return {entry.page: list(entry.requests) for entry in self.entries}

    @property
    def page_count(self) -> int:
        """Number of pages in the report."""
        return len(self.entries)

    @property
    def request_count(self) -> int:
        """Number of distinct (method, url) pairs across all pages."""
        return len({r.key for entry in self.entries for r in entry.requests})

    @property
    def has_errors(self) -> bool:
        """Check if there were any errors."""
        return len(self.errors) > 0

    def get_entry(self, page: str) -> Optional[PageEntry]:
        """Get the entry for a page display path."""
        for entry in self.entries:
            if entry.page == page:
                return entry
        return None
