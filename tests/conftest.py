"""Pytest configuration and fixtures."""

import shutil
import tempfile
from pathlib import Path

import httpx
import pytest

from truveo.api.client import QueryClient
from truveo.config.settings import APIConfig, TruveoConfig


def video_xml(video_id: str, title: str) -> str:
    return (
        f"<Video><id>{video_id}</id><title>{title}</title>"
        f"<thumbnailUrl>http://example.com/{video_id}.jpg</thumbnailUrl></Video>"
    )


def videos_response(videos: list[tuple[str, str]], first: int = 0,
                    declared: int | None = None, available: int = 100,
                    extra: str = "") -> str:
    """getVideos response body with the given (id, title) videos."""
    declared = len(videos) if declared is None else declared
    items = "".join(video_xml(video_id, title) for video_id, title in videos)
    return (
        "<?xml version='1.0' encoding='UTF-8'?>"
        "<Response>"
        "<method>truveo.videos.getVideos</method>"
        "<query>funny</query>"
        "<sortby>vrank</sortby>"
        "<querySuggestion>funny cats</querySuggestion>"
        "<sphinxquery>@* funny</sphinxquery>"
        "<sphinxfilters>adult=0</sphinxfilters>"
        "<VideoSet>"
        f"<totalResultsAvailable>{available}</totalResultsAvailable>"
        f"<totalResultsReturned>{declared}</totalResultsReturned>"
        f"<firstResultPosition>{first}</firstResultPosition>"
        "<title>Most relevant 'funny' videos</title>"
        "<rssUrl>http://xml.searchvideo.com/rss?query=funny</rssUrl>"
        f"{items}"
        "</VideoSet>"
        f"{extra}"
        "</Response>"
    )


def related_response(kind: str, items: dict[str, int]) -> str:
    """getRelated<kind>s response body."""
    body = "".join(
        f"<{kind}><name>{name}</name><count>{count}</count></{kind}>"
        for name, count in items.items()
    )
    return (
        "<?xml version='1.0' encoding='UTF-8'?>"
        "<Response>"
        f"<method>truveo.videos.getRelated{kind}s</method>"
        "<query>funny</query>"
        f"<{kind}Set>"
        f"<totalResultsReturned>{len(items)}</totalResultsReturned>"
        "<firstResultPosition>0</firstResultPosition>"
        f"{body}"
        f"</{kind}Set>"
        "</Response>"
    )


ACCESS_DENIED = (
    "<?xml version='1.0' encoding='UTF-8'?>"
    "<Response><Error Code='14'>Access Denied</Error></Response>"
)


class FakeTruveo:
    """Serves queued response bodies and records the requests it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.bodies: list[str] = []
        self.status_code = 200

    def queue(self, *bodies: str) -> None:
        self.bodies.extend(bodies)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = self.bodies.pop(0) if self.bodies else videos_response([], first=0)
        return httpx.Response(self.status_code, text=body)

    def params(self, index: int = -1) -> dict[str, str]:
        return dict(self.requests[index].url.params)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config():
    """Create a test configuration."""
    return TruveoConfig(api=APIConfig(app_id="test-app"))


@pytest.fixture
def fake_api():
    """In-memory Truveo service."""
    return FakeTruveo()


@pytest.fixture
def client(test_config, fake_api):
    """QueryClient talking to the in-memory service."""
    http_client = httpx.Client(transport=httpx.MockTransport(fake_api.handler))
    query_client = QueryClient(test_config, http_client=http_client)
    yield query_client
    http_client.close()


@pytest.fixture
def make_videos():
    """Builder for getVideos response bodies."""
    return videos_response


@pytest.fixture
def make_related():
    """Builder for getRelated<Type> response bodies."""
    return related_response


@pytest.fixture
def access_denied():
    """Error response for an invalid app id."""
    return ACCESS_DENIED
