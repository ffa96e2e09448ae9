"""Conversion of Truveo XML responses into result cursors."""

import logging
from xml.etree import ElementTree

from ..core.cursor import ResultCursor
from ..core.models import NamedCounts, QueryKind, VideoRecord

logger = logging.getLogger(__name__)


def element_text(root: ElementTree.Element, path: str) -> str | None:
    """Text of the first element matching ``path``, if any."""
    element = root.find(path)
    if element is None:
        return None
    return element.text


def element_int(root: ElementTree.Element, path: str) -> int | None:
    """Integer value of the first element matching ``path``, if any."""
    text = element_text(root, path)
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        logger.warning(f"Non-numeric value '{text}' at {path}")
        return None


def element_to_record(element: ElementTree.Element) -> VideoRecord:
    """Flatten the child elements of ``element`` into a name/text mapping."""
    return {child.tag: child.text for child in element}


class ResponseParser:
    """Turns parsed Truveo response documents into ResultCursor objects."""

    def parse_document(self, body: str | bytes) -> ElementTree.Element:
        """Parse a raw response body, raising ``ElementTree.ParseError`` when malformed."""
        return ElementTree.fromstring(body)

    def find_error(self, root: ElementTree.Element) -> ResultCursor | None:
        """Error result for an ``<Error Code=...>`` response, or None."""
        error = next(root.iter("Error"), None)
        if error is None:
            return None
        return ResultCursor.error(error.get("Code") or "unknown", error.text)

    def parse_videos(self, root: ElementTree.Element) -> ResultCursor:
        """Build a cursor from a getVideos response."""
        result = self._parse_common(root)

        result.total_results_available = element_int(root, ".//VideoSet/totalResultsAvailable")
        result.total_results_returned = element_int(root, ".//VideoSet/totalResultsReturned")
        result.first_result_position = element_int(root, ".//VideoSet/firstResultPosition")
        result.rss_url = element_text(root, ".//rssUrl")
        result.video_set_title = element_text(root, ".//VideoSet/title")

        result.video_set = [element_to_record(video) for video in root.iter("Video")]

        declared = result.total_results_returned or 0
        if declared != len(result.video_set):
            message = (
                f"Results mismatch: totalResultsReturned ({result.total_results_returned}) "
                f"!= number of videos ({len(result.video_set)})"
            )
            logger.warning(message)
            result.warnings.append(message)

        result.channel_results_returned = element_int(root, ".//ChannelSet/totalResultsReturned")
        result.channel_set = self.parse_counts(root, QueryKind.CHANNEL)

        result.tag_results_returned = element_int(root, ".//TagSet/totalResultsReturned")
        result.tag_set = self.parse_counts(root, QueryKind.TAG)

        result.category_results_returned = element_int(root, ".//CategorySet/totalResultsReturned")
        result.category_set = self.parse_counts(root, QueryKind.CATEGORY)

        result.user_results_returned = element_int(root, ".//UserSet/totalResultsReturned")
        result.user_set = self.parse_counts(root, QueryKind.USER)

        return result

    def parse_related(self, root: ElementTree.Element, kind: QueryKind) -> ResultCursor:
        """Build a cursor from a getRelated<Type> response."""
        result = self._parse_common(root)
        result.total_results_returned = element_int(root, ".//totalResultsReturned")
        result.first_result_position = element_int(root, ".//firstResultPosition")

        counts = self.parse_counts(root, kind)
        if kind is QueryKind.TAG:
            result.tag_set = counts
        elif kind is QueryKind.CHANNEL:
            result.channel_set = counts
        elif kind is QueryKind.CATEGORY:
            result.category_set = counts
        else:
            result.user_set = counts

        return result

    def parse_counts(self, root: ElementTree.Element, kind: QueryKind) -> NamedCounts:
        """Collect the name/count pairs of every ``kind`` item in the document."""
        counts: NamedCounts = {}
        for item in root.iter(kind.element):
            name = element_text(item, "name")
            if name is None:
                continue
            counts[name] = element_int(item, "count") or 0
        return counts

    def _parse_common(self, root: ElementTree.Element) -> ResultCursor:
        """Scalar fields shared by every response type."""
        return ResultCursor(
            method=element_text(root, "method"),
            query=element_text(root, "query"),
            sortby=element_text(root, "sortby"),
            query_suggestion=element_text(root, "querySuggestion"),
            sphinxquery=element_text(root, "sphinxquery"),
            sphinxfilters=element_text(root, "sphinxfilters"),
        )
