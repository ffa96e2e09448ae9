"""Result holder with transparent pagination over getVideos results."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .models import MAX_RESULTS, NamedCounts, QueryParameters, VideoRecord

if TYPE_CHECKING:
    from ..api.client import QueryClient

logger = logging.getLogger(__name__)


@dataclass
class ResultCursor:
    """One page of results from a Truveo call.

    A cursor created by ``QueryClient.get_videos`` can be iterated past its
    first page: when the local video buffer runs dry it asks the client for
    the next page and copies that page's fields into itself, so references
    to the cursor stay valid. Iteration stops at the service's hard cap of
    1000 results or at the first empty page.

    Error results use the same type with only ``error_code`` and
    ``error_text`` set.
    """

    video_set: list[VideoRecord] | None = None
    channel_set: NamedCounts | None = None
    tag_set: NamedCounts | None = None
    category_set: NamedCounts | None = None
    user_set: NamedCounts | None = None

    method: str | None = None
    query: str | None = None
    sortby: str | None = None
    query_suggestion: str | None = None
    rss_url: str | None = None
    video_set_title: str | None = None
    sphinxquery: str | None = None
    sphinxfilters: str | None = None

    total_results_available: int | None = None
    total_results_returned: int | None = None
    first_result_position: int | None = None

    channel_results_returned: int | None = None
    tag_results_returned: int | None = None
    category_results_returned: int | None = None
    user_results_returned: int | None = None

    error_code: str | None = None
    error_text: str | None = None
    warnings: list[str] = field(default_factory=list)

    params: QueryParameters | None = None
    client: "QueryClient | None" = field(default=None, repr=False, compare=False)
    _produced: list[VideoRecord] = field(
        default_factory=list, init=False, repr=False, compare=False
    )
    _exhausted: bool = field(default=False, init=False, repr=False, compare=False)
    _delivered: int = field(default=0, init=False, repr=False, compare=False)

    # Fields replaced when the next page is fetched
    PAGE_FIELDS = (
        "video_set", "channel_set", "tag_set", "category_set", "user_set",
        "query_suggestion", "rss_url", "video_set_title",
        "sphinxquery", "sphinxfilters",
        "total_results_available", "total_results_returned", "first_result_position",
        "channel_results_returned", "tag_results_returned",
        "category_results_returned", "user_results_returned",
        "error_code", "error_text",
    )

    @classmethod
    def error(cls, code: str, text: str | None) -> "ResultCursor":
        """Create an error result."""
        return cls(error_code=code, error_text=text)

    @property
    def is_error(self) -> bool:
        """Whether this result carries an error code."""
        return bool(self.error_code)

    @property
    def ok(self) -> bool:
        return not self.is_error

    @property
    def next_start(self) -> int:
        """Result position the following page starts at."""
        return (self.first_result_position or 0) + (self.total_results_returned or 0)

    def produce_next(self) -> VideoRecord | None:
        """Return the next video, fetching another page when needed.

        Returns None once the results are exhausted, and on every call after.
        """
        if self._exhausted or self.video_set is None:
            return None

        if self._delivered >= MAX_RESULTS:
            logger.debug(f"Delivered {self._delivered} videos, stopping")
            return self._exhaust()

        if not self.video_set:
            if self.client is None or self.params is None:
                return self._exhaust()

            next_start = self.next_start
            if next_start >= MAX_RESULTS:
                logger.debug(f"Reached result cap at position {next_start}")
                return self._exhaust()

            # A page that under-declares its size would be requested again
            if self._delivered and next_start <= (self.first_result_position or 0):
                logger.warning(
                    f"Next page start {next_start} does not advance past "
                    f"{self.first_result_position}, stopping"
                )
                return self._exhaust()

            next_params = self.params.with_start(next_start)
            logger.debug(f"Fetching next page for '{next_params.query}' at {next_start}")
            page = self.client.fetch_videos(next_params)
            self._take_page(page)
            self.params = next_params

            if not self.video_set:
                return self._exhaust()

        self._delivered += 1
        return self.video_set.pop(0)

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def _exhaust(self) -> None:
        self._exhausted = True
        return None

    def iterate(self) -> Iterator[VideoRecord]:
        """Iterate over all videos of the query, up to 1000.

        Videos produced by earlier iterations are replayed first.
        """
        yield from list(self._produced)
        while (video := self.produce_next()) is not None:
            self._produced.append(video)
            yield video

    def __iter__(self) -> Iterator[VideoRecord]:
        return self.iterate()

    def _take_page(self, page: "ResultCursor") -> None:
        """Copy the state of a newly fetched page into this cursor."""
        for name in self.PAGE_FIELDS:
            setattr(self, name, getattr(page, name))
        self.warnings.extend(page.warnings)
