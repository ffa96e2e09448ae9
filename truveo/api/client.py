"""Client for the Truveo video search API."""

import logging
from collections.abc import Callable
from urllib.parse import urlencode
from xml.etree import ElementTree

import httpx

from ..config.settings import APIConfig, TruveoConfig
from ..core.cursor import ResultCursor
from ..core.models import TRANSPORT_ERROR_CODE, QueryKind, QueryParameters, singularize
from .response_parser import ResponseParser

logger = logging.getLogger(__name__)

GET_VIDEOS_METHOD = "truveo.videos.getVideos"

# Sort directives accepted inside a query, e.g. "madonna sort:mostRecent"
SORTERS = (
    "sort:mostPopular", "sort:mostPopularNow", "sort:mostPopularThisWeek",
    "sort:mostPopularThisMonth", "sort:vrank", "sort:mostRecent",
    "sort:mostRelevant", "sort:topFavorites", "sort:highestRated",
)

# Filter directives; the ones ending in ':' take a value
FILTERS = (
    "days_old:", "bitrate:", "type:free", "type:reg", "type:sub", "type:rent",
    "type:buy", "runtime:", "quality:poor", "quality:fair", "quality:good",
    "quality:excellent", "format:win", "format:real", "format:qt",
    "format:flash", "format:hi-q", "site:", "file_size:",
)

# Field modifiers restricting a query term, e.g. "channel:MTV"
MODIFIERS = (
    "category:", "channel:", "tag:", "user:", "id:", "sim:", "title:",
    "description:", "artist:", "album:", "show:", "actor:", "director:",
    "writer:", "producer:", "distributor:",
)


class QueryClient:
    """Client for the Truveo video search API.

    Every public call returns a ResultCursor; failures are reported through
    its ``error_code`` and ``error_text`` rather than raised.
    """

    sorters = SORTERS
    filters = FILTERS
    modifiers = MODIFIERS

    def __init__(self, config: TruveoConfig, http_client: httpx.Client | None = None):
        """Initialize API client with configuration.

        An injected ``http_client`` stays owned by the caller and is not
        closed by ``close()``.
        """
        self.config = config
        self.api = config.api
        self.parser = ResponseParser()

        self._owns_client = http_client is None
        self.client = http_client or httpx.Client(timeout=httpx.Timeout(self.api.timeout))

    @classmethod
    def from_app_id(cls, app_id: str, host: str = "xml.searchvideo.com",
                    path: str = "/apiv3", port: int = 80,
                    http_client: httpx.Client | None = None) -> "QueryClient":
        """Create a client from connection settings instead of a full config."""
        config = TruveoConfig(api=APIConfig(app_id=app_id, host=host, path=path, port=port))
        return cls(config, http_client=http_client)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            self.client.close()

    def get_videos(self, query: str = "", results: int | None = None, start: int = 0,
                   show_related: int = 0, tag_results: int = 10, channel_results: int = 10,
                   category_results: int = 10, user_results: int = 10,
                   show_adult: int = 0) -> ResultCursor:
        """Search for videos matching ``query``.

        ``results`` defaults to the configured page size (10) and may be at
        most 50. With ``show_related`` set to 1 the tag, channel, category and
        user sets are returned as well; the ``*_results`` arguments cap their
        sizes. An empty query returns the top videos in vrank order.

        The returned cursor can be iterated to page through up to 1000
        videos; each further page costs one API call.
        """
        params = QueryParameters(
            method=GET_VIDEOS_METHOD,
            appid=self.api.app_id,
            query=query,
            results=results if results is not None else self.config.pagination.page_size,
            start=start,
            showRelatedItems=show_related,
            tagResults=tag_results,
            channelResults=channel_results,
            categoryResults=category_results,
            userResults=user_results,
            showAdult=show_adult,
        )
        return self.fetch_videos(params)

    def get_related_tags(self, query: str = "", results: int = 10, start: int = 0) -> ResultCursor:
        """Tags and their counts related to ``query``, in ``tag_set``."""
        return self.get_related(QueryKind.TAG, query, results, start)

    def get_related_channels(self, query: str = "", results: int = 10, start: int = 0) -> ResultCursor:
        """Channels and their counts related to ``query``, in ``channel_set``."""
        return self.get_related(QueryKind.CHANNEL, query, results, start)

    def get_related_categories(self, query: str = "", results: int = 10, start: int = 0) -> ResultCursor:
        """Categories and their counts related to ``query``, in ``category_set``."""
        return self.get_related(QueryKind.CATEGORY, query, results, start)

    def get_related_users(self, query: str = "", results: int = 10, start: int = 0) -> ResultCursor:
        """Users and their counts related to ``query``, in ``user_set``."""
        return self.get_related(QueryKind.USER, query, results, start)

    def get_related(self, kind: QueryKind | str, query: str = "", results: int = 10,
                    start: int = 0) -> ResultCursor:
        """Run a getRelated<Type> call for one facet.

        ``kind`` is a QueryKind or its plural API name such as ``"Tags"``.
        """
        if isinstance(kind, str):
            kind = self._kind_for(kind)

        params = QueryParameters(
            method=kind.method,
            appid=self.api.app_id,
            query=query,
            results=results,
            start=start,
        )
        return self._call(params, lambda root: self.parser.parse_related(root, kind))

    def fetch_videos(self, params: QueryParameters) -> ResultCursor:
        """Run a getVideos call with prepared parameters."""
        result = self._call(params, self.parser.parse_videos)
        if result.ok:
            result.params = params
            result.client = self
        return result

    def build_url(self, params: QueryParameters) -> str:
        """Full request URL for ``params``."""
        scheme = "https" if self.api.port == 443 else "http"
        path = self.api.path.rstrip("?")
        return f"{scheme}://{self.api.host}:{self.api.port}{path}?{urlencode(params.as_dict())}"

    def _call(self, params: QueryParameters,
              build: Callable[[ElementTree.Element], ResultCursor]) -> ResultCursor:
        """Fetch, check for errors and convert the response."""
        try:
            root = self._rest(params)
        except httpx.HTTPError as e:
            logger.error(f"Request for '{params.method}' failed: {e}")
            return ResultCursor.error(TRANSPORT_ERROR_CODE, f"request failed: {e}")
        except ElementTree.ParseError as e:
            logger.error(f"Unparseable response for '{params.method}': {e}")
            return ResultCursor.error(TRANSPORT_ERROR_CODE, f"bad xml: {e}")
        except Exception as e:
            logger.error(f"Unexpected error during API request: {e}", exc_info=True)
            return ResultCursor.error(TRANSPORT_ERROR_CODE, f"request failed: {e}")

        error = self.parser.find_error(root)
        if error is not None:
            logger.warning(
                f"{params.method}({params.query!r}) returned error: {error.error_code} {error.error_text}"
            )
            return error

        try:
            return build(root)
        except Exception as e:
            logger.error(f"Unexpected error converting response for '{params.method}': {e}", exc_info=True)
            return ResultCursor.error(TRANSPORT_ERROR_CODE, f"bad response: {e}")

    def _rest(self, params: QueryParameters) -> ElementTree.Element:
        """Perform the GET request and parse the body."""
        url = self.build_url(params)
        logger.debug(f"GET {url}")
        response = self.client.get(url)
        if response.status_code != 200:
            logger.warning(f"HTTP {response.status_code} from {self.api.host}")
        return self.parser.parse_document(response.content)

    def _kind_for(self, type_name: str) -> QueryKind:
        singular = singularize(type_name)
        for kind in QueryKind:
            if kind.element == singular:
                return kind
        raise ValueError(f"Unknown related-items type: {type_name}")
