"""Core data models for Truveo queries and results."""

from dataclasses import asdict, dataclass, replace
from enum import Enum

# Metadata of a single video, keyed by element name (title, id, thumbnailUrl, ...)
VideoRecord = dict[str, str | None]

# Facet name -> number of matching videos
NamedCounts = dict[str, int]

# The service never returns results past this position
MAX_RESULTS = 1000

# Code used for failures that never reached the service or could not be parsed
TRANSPORT_ERROR_CODE = "69"


class QueryKind(Enum):
    """Facets that can be requested through a related-items call."""

    TAG = "Tags"
    CHANNEL = "Channels"
    CATEGORY = "Categories"
    USER = "Users"

    @property
    def element(self) -> str:
        """Element name of a single item, e.g. ``Category``."""
        return singularize(self.value)

    @property
    def method(self) -> str:
        """Remote method name for the related-items call."""
        return f"truveo.videos.getRelated{self.value}"


def singularize(type_name: str) -> str:
    """Singular element name for a plural query type."""
    if type_name == "Categories":
        return "Category"
    if type_name in ("Tags", "Channels", "Users"):
        return type_name[:-1]
    return type_name


@dataclass(frozen=True)
class QueryParameters:
    """Parameters of a single API request."""

    method: str
    appid: str
    query: str = ""
    results: int = 10
    start: int = 0
    showRelatedItems: int | None = None
    tagResults: int | None = None
    channelResults: int | None = None
    categoryResults: int | None = None
    userResults: int | None = None
    showAdult: int | None = None

    def as_dict(self) -> dict[str, str | int]:
        """Parameters that are actually sent, in a stable order."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    def with_start(self, start: int) -> "QueryParameters":
        """Copy of these parameters starting at another result position."""
        return replace(self, start=start)
