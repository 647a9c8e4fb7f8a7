import json

import pytest

from word_scout.config import CrawlerConfig
from word_scout.crawler.site import SitePolicy
from word_scout.errors import StateFileError
from word_scout.extract.filters import FilterMode
from word_scout.state import CrawlState, merge_options
from word_scout.store import UrlDb, UrlStatus


@pytest.fixture()
def state() -> CrawlState:
    return CrawlState(
        starting_url="https://example.com/",
        depth_reached=2,
        visited=["https://example.com/", "https://example.com/a"],
        staged=["https://example.com/b"],
        unvisited=["https://example.com/c", "https://example.com/d"],
        skipped=["https://other.org/"],
        errored=[],
        site_policy=SitePolicy.SIBLING,
        filters=[FilterMode.DEUNICODE, FilterMode.ANY_NUMBERS],
        depth=4,
        include_js=True,
        min_word_length=5,
        requests_per_second=9,
        limit_concurrent=3,
    )


def test_fill_urldb_drains_lists(state: CrawlState):
    urldb = UrlDb()
    state.fill_urldb(urldb)

    assert urldb.num_visited_urls() == 2
    assert urldb.num_staged_urls() == 1
    assert urldb.num_unvisited_urls() == 2
    assert urldb.num_skipped_urls() == 1
    assert urldb.num_errored_urls() == 0
    for name in ("visited", "staged", "unvisited", "skipped", "errored"):
        assert getattr(state, name) == []


def test_fill_urldb_overwrites_existing(state: CrawlState):
    urldb = UrlDb()
    urldb.mark_errored("https://example.com/c")
    state.fill_urldb(urldb)
    assert urldb.status("https://example.com/c") is UrlStatus.UNVISITED


def test_json_uses_camel_case(state: CrawlState):
    data = json.loads(state.to_json())
    assert data["startingUrl"] == "https://example.com/"
    assert data["depthReached"] == 2
    assert data["sitePolicy"] == "sibling"
    assert data["filters"] == ["deunicode", "any-numbers"]
    assert data["requestsPerSecond"] == 9
    assert "starting_url" not in data


def test_save_and_load(tmp_path, state: CrawlState):
    path = state.save(tmp_path / "nested" / "state.json")
    loaded = CrawlState.from_file(path)
    assert loaded == state


def test_loader_accepts_snake_case(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"starting_url": "https://example.com/", "depth_reached": 1}), encoding="utf-8")
    loaded = CrawlState.from_file(path)
    assert loaded.depth_reached == 1
    assert loaded.visited == []


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"depthReached": 1}), json.dumps({"startingUrl": "x", "depthReached": -1})],
)
def test_malformed_state_file(tmp_path, content):
    path = tmp_path / "state.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StateFileError):
        CrawlState.from_file(path)


def test_missing_state_file(tmp_path):
    with pytest.raises(StateFileError):
        CrawlState.from_file(tmp_path / "absent.json")


def test_capture_sorts_partitions():
    urldb = UrlDb()
    for url in ("https://e.com/z", "https://e.com/a", "https://e.com/m"):
        urldb.mark_visited(url)
    urldb.mark_errored("https://e.com/broken")
    cfg = CrawlerConfig(url="https://e.com/", depth=3, filters="deunicode")
    state = CrawlState.capture(cfg, "https://e.com/", 2, urldb)

    assert state.visited == ["https://e.com/a", "https://e.com/m", "https://e.com/z"]
    assert state.errored == ["https://e.com/broken"]
    assert state.depth == 3
    assert state.filters == [FilterMode.DEUNICODE]


def test_new_state_defaults():
    state = CrawlState.new("https://example.com/")
    assert state.depth_reached == 0
    assert state.unvisited == []
    assert state.site_policy is SitePolicy.SAME


def test_merge_non_strict_keeps_current(state: CrawlState):
    current = CrawlerConfig(url="https://ignored.org/", depth=1, min_word_length=2)
    merged = merge_options(state, current, strict=False)
    assert merged.url == "https://example.com/"
    assert merged.depth == 1
    assert merged.min_word_length == 2
    assert merged.site_policy is SitePolicy.SAME


def test_merge_strict_uses_persisted(state: CrawlState):
    current = CrawlerConfig(depth=1, output="out.txt")
    merged = merge_options(state, current, strict=True)
    assert merged.url == "https://example.com/"
    assert merged.depth == 4
    assert merged.site_policy is SitePolicy.SIBLING
    assert merged.filters == [FilterMode.DEUNICODE, FilterMode.ANY_NUMBERS]
    assert merged.include_js is True
    assert merged.min_word_length == 5
    assert merged.requests_per_second == 9
    assert merged.limit_concurrent == 3
    # outputs are never part of the persisted options
    assert merged.output == "out.txt"
