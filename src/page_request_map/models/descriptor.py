"""
API descriptor data models.

Models representing the backend API calls declared by service modules.
"""

from pydantic import BaseModel, Field


class ApiDescriptor(BaseModel):
    """A single callable API declared by a service function."""

    name: str = Field(description="Name of the service function")
    method: str = Field(description="HTTP method of the request")
    url: str = Field(description="Request URL as written in the service source")

    class Config:
        frozen = True

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for deduplication; the name is informational."""
        return (self.method, self.url)

    @property
    def identifier(self) -> str:
        """Human-readable identifier for this descriptor."""
        return f"{self.method} {self.url}"


# group name -> exported function name -> descriptor
ServiceGroupMap = dict[str, dict[str, ApiDescriptor]]


def dedupe_descriptors(
    descriptors: list[ApiDescriptor],
    seen: set[tuple[str, str]] | None = None,
) -> list[ApiDescriptor]:
    """
    Drop descriptors whose (method, url) was already seen.

    Keeps the first occurrence and preserves the input order.

    Args:
        descriptors: Descriptors in discovery order.
        seen: Keys already present downstream. Updated in place when given.

    Returns:
        The deduplicated list.
    """
    if seen is None:
        seen = set()
    unique: list[ApiDescriptor] = []
    for descriptor in descriptors:
        if descriptor.key in seen:
            continue
        seen.add(descriptor.key)
        unique.append(descriptor)
    return unique
