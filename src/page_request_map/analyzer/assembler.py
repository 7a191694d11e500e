"""
Page request map assembly.

Turns per-entry resolution results into report entries keyed by page
display path.
"""

import posixpath
from typing import Iterable

from page_request_map.models.descriptor import ApiDescriptor, dedupe_descriptors
from page_request_map.models.report import PageEntry


def page_display_path(file_id: str, alias: str = "@", pages_dir: str = "pages") -> str:
    """
    Derive the page display path from a page's display identity.

    ``@/pages/Profile.tsx`` becomes ``/Profile``; identities outside the
    pages directory only lose their extension.
    """
    prefix = f"{alias}/{pages_dir}/"
    page = "/" + file_id[len(prefix):] if file_id.startswith(prefix) else file_id
    stem, extension = posixpath.splitext(page)
    return stem if extension else page


def assemble_page_entries(
    results: Iterable[tuple[str, list[ApiDescriptor]]],
    alias: str = "@",
    pages_dir: str = "pages",
) -> list[PageEntry]:
    """
    Assemble page entries from resolution results.

    Entries that share a display path (``Page.tsx`` next to ``Page.jsx``)
    are merged: descriptors of the later file are appended unless their
    (method, url) is already listed. Pages without requests are kept.

    Args:
        results: (display identity, descriptors) pairs in entry order.
        alias: Token that stands for the source root.
        pages_dir: Directory under the source root that holds pages.

    Returns:
        One entry per display path, in first-seen order.
    """
    files: dict[str, str] = {}
    requests: dict[str, list[ApiDescriptor]] = {}
    seen: dict[str, set[tuple[str, str]]] = {}

    for file_id, descriptors in results:
        page = page_display_path(file_id, alias=alias, pages_dir=pages_dir)
        if page not in requests:
            files[page] = file_id
            requests[page] = []
            seen[page] = set()
        requests[page].extend(dedupe_descriptors(descriptors, seen[page]))

    return [
        PageEntry(page=page, file=files[page], requests=page_requests)
        for page, page_requests in requests.items()
    ]


def assemble_page_request_map(
    results: Iterable[tuple[str, list[ApiDescriptor]]],
    alias: str = "@",
    pages_dir: str = "pages",
) -> dict[str, list[ApiDescriptor]]:
    """Assemble the plain page display path -> descriptors mapping."""
    return {
        entry.page: entry.requests
        for entry in assemble_page_entries(results, alias=alias, pages_dir=pages_dir)
    }
