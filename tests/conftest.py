import json

import pytest

from scraper.models import Page

PLACE_URL = (
    "https://www.google.com/maps/place/Joe's+Coffee/@40.7359,-73.9911,17z/"
    "data=!4m8!3m7!1s0x89c259a61c75684f:0x79d31adb123348d2!8m2!3d40.7359!4d-73.9911"
    "!9m1!1b1!16s%2Fg%2F1tfz9wzs"
)
PLACE_ID = "0x89c259a61c75684f:0x79d31adb123348d2"


def envelope(cursor=None, reviews=None) -> str:
    """Body text the way the listing endpoint returns it."""
    return ")]}'\n" + json.dumps([None, cursor, reviews, None])


def make_page(cursor=None, reviews=None) -> Page:
    return Page([None, cursor, reviews])


def records(prefix: str, count: int) -> list:
    return [[f"{prefix}-{i}"] for i in range(count)]


class SleepRecorder:
    """Stands in for asyncio.sleep and remembers every delay in seconds."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


class ScriptedFetcher:
    """Returns (or raises) scripted results from fetch_reviews, in order."""

    def __init__(self, results):
        self.results = list(results)
        self.calls = []

    async def fetch_reviews(self, url, sort, next_page="", search_query=""):
        self.calls.append({
            "url": url,
            "sort": sort,
            "next_page": next_page,
            "search_query": search_query,
        })
        if not self.results:
            raise AssertionError(f"unexpected fetch for cursor {next_page!r}")
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def cursors(self):
        return [call["next_page"] for call in self.calls]


@pytest.fixture
def sleep():
    return SleepRecorder()
