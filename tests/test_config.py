import json
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from word_scout.config import CrawlerConfig, load_config
from word_scout.crawler.models import DEFAULT_USER_AGENT, CrawlMode, CrawlOptions
from word_scout.crawler.site import SitePolicy
from word_scout.extract.filters import FilterMode


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("url: http://example.com/\ndepth: 2", ".yaml", None),
        ("url: http://example.com/\ndepth: 2", ".yml", None),
        (json.dumps({"url": "http://example.com/", "depth": 2}), ".json", None),
        ("depth: -1", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("output: '  '", ".yaml", ValidationError),
        ("::invalid: yaml: here", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("[1, 2]", ".json", TypeError),
        ("url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.url == "http://example.com/"
        assert cfg.depth == 2


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None)
    assert cfg == CrawlerConfig()


def test_load_config_default_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("depth: 7\nfilters: deunicode,no-ascii\n", encoding="utf-8")
    cfg = load_config(None)
    assert cfg.depth == 7
    assert cfg.filters == [FilterMode.DEUNICODE, FilterMode.NO_ASCII]


def test_explicit_path_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_defaults():
    cfg = CrawlerConfig()
    assert cfg.url is None
    assert cfg.depth == 1
    assert cfg.min_word_length == 3
    assert cfg.max_word_length == sys.maxsize
    assert cfg.filters == [FilterMode.NONE]
    assert cfg.site_policy is SitePolicy.SAME
    assert cfg.requests_per_second == 5
    assert cfg.limit_concurrent == 5
    assert cfg.user_agent == DEFAULT_USER_AGENT
    assert cfg.output == "wdict.txt"
    assert cfg.state_file == "state-wdict.json"


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.depth = 3


def test_unknown_filter_rejected():
    with pytest.raises(ValidationError):
        CrawlerConfig(filters="bogus")


def test_limit_concurrent_must_be_positive():
    with pytest.raises(ValidationError):
        CrawlerConfig(limit_concurrent=0)


def test_crawl_options_from_config(tmp_path):
    web = CrawlOptions.from_config(CrawlerConfig(url="https://example.com/", site_policy="all", depth=4))
    assert web.mode is CrawlMode.WEB
    assert web.site_policy is SitePolicy.ALL
    assert web.depth == 4

    local = CrawlOptions.from_config(CrawlerConfig(url=tmp_path.as_uri() + "/"))
    assert local.mode is CrawlMode.LOCAL

    with pytest.raises(ValueError):
        CrawlOptions.from_config(CrawlerConfig())
