import logging

import pytest

from word_scout.config import CrawlerConfig
from word_scout.engine import Engine, start_crawl
from word_scout.logger import configure
from word_scout.shutdown import ShutdownNotifier
from word_scout.state import CrawlState
from word_scout.store import UrlStatus

SITE = {
    "/": '<html><body>Orchard <a href="/trees">Trees</a></body></html>',
    "/trees": '<html><body>Apple Cherry <a href="/roots">Roots</a></body></html>',
    "/roots": "<html><body>Mycelium</body></html>",
}


@pytest.mark.asyncio()
async def test_run_save_and_resume(serve, basic_config: CrawlerConfig, tmp_path):
    base = await serve(SITE)
    cfg = basic_config.model_copy(update={"url": f"{base}/", "output_state": True})

    report = await start_crawl(cfg)
    assert report.depth_reached == 1
    assert set(report.words) == {"orchard", "trees"}
    Engine.save(report)

    state = CrawlState.from_file(cfg.state_file)
    assert state.starting_url == f"{base}/"
    assert state.visited == [f"{base}/"]
    assert state.unvisited == [f"{base}/trees"]

    resumed_cfg = cfg.model_copy(update={"depth": 2, "append": True})
    resumed = await Engine(resumed_cfg, state).run()
    assert resumed.depth_reached == 2
    assert resumed.urldb.status(f"{base}/trees") is UrlStatus.VISITED
    assert resumed.urldb.status(f"{base}/roots") is UrlStatus.UNVISITED
    # previous dictionary words are kept with --append
    assert {"orchard", "apple", "cherry", "roots"} <= set(resumed.words)
    assert state.visited == []


@pytest.mark.asyncio()
async def test_closed_notifier_stops_before_any_visit(serve, basic_config: CrawlerConfig):
    base = await serve(SITE)
    cfg = basic_config.model_copy(update={"url": f"{base}/", "depth": 3})
    notifier = ShutdownNotifier()
    notifier.close()

    report = await Engine(cfg).run(notifier)

    assert report.depth_reached == 0
    assert report.urldb.num_visited_urls() == 0
    assert len(report.words) == 0


def test_save_writes_sorted_dictionary(basic_config: CrawlerConfig, tmp_path):
    from word_scout.engine import CrawlReport
    from word_scout.store import UrlDb, WordDb

    cfg = basic_config.model_copy(update={"output": str(tmp_path / "out" / "words.txt")})
    report = CrawlReport(config=cfg, depth_reached=0, urldb=UrlDb(), words=WordDb(["pear", "fig", "apple"]))
    path = Engine.save(report)
    assert path.read_text(encoding="utf-8") == "apple\nfig\npear\n"
    assert not (tmp_path / "state.json").exists()


def test_log_summary_reports_counts(basic_config: CrawlerConfig, caplog):
    from word_scout.engine import CrawlReport
    from word_scout.store import UrlDb, WordDb

    lg = configure(level="INFO")
    lg.propagate = True
    urldb = UrlDb()
    urldb.mark_visited("a")
    urldb.mark_errored("b")
    report = CrawlReport(config=basic_config, depth_reached=1, urldb=urldb, words=WordDb(["w"]))

    with caplog.at_level(logging.INFO, logger="WordScout"):
        Engine.log_summary(report)

    assert "visited urls: 1" in caplog.text
    assert "errored urls: 1" in caplog.text
    assert "unique words: 1" in caplog.text
