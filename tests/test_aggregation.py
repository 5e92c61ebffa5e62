import asyncio
import time

from nebula.scrapers.base import BaseScraper
from nebula.scrapers.manager import ScraperManager
from nebula.scrapers.models import MediaQuery, MediaType, TorrentRecord
from nebula.services.orchestration import TorrentAggregator
from nebula.services.ranking import rank_torrents
from nebula.services.torrent_manager import extract_trackers_from_magnet
from nebula.utils.network import Transport

from conftest import UDP, WSS, FakeSession, FakeTransport


def make_stub(stub_name, hashes=(), seeds=(), error=None, **attrs):
    class StubScraper(BaseScraper):
        name = stub_name
        calls = []

        async def fetch(self, query, context):
            self.calls.append(query)
            if error is not None:
                raise error
            return [
                self.record(release_title=f"{stub_name} {h[:4]}", locator=h, seeds=s)
                for h, s in zip(hashes, seeds)
            ]

    for key, value in attrs.items():
        setattr(StubScraper, key, value)
    return StubScraper


def run(aggregator, **query):
    query.setdefault("title", "Example")
    return asyncio.run(aggregator.aggregate(MediaQuery(**query)))


def test_rank_by_seeds_descending():
    torrents = [
        TorrentRecord(source="A", locator=str(i), seeds=s) for i, s in enumerate([3, 50, 0, 12])
    ]

    assert [t.seeds for t in rank_torrents(torrents, 50)] == [50, 12, 3, 0]


def test_rank_ties_break_on_peers_then_source():
    torrents = [
        TorrentRecord(source="Zooqle", locator="1", seeds=5, peers=1),
        TorrentRecord(source="knaben", locator="2", seeds=5, peers=1),
        TorrentRecord(source="EZTV", locator="3", seeds=5, peers=9),
    ]

    assert [t.locator for t in rank_torrents(torrents, 50)] == ["3", "2", "1"]


def test_results_are_capped(test_settings):
    hashes = [f"{i:040x}" for i in range(80)]
    scrapers = {"bulk": make_stub("Bulk", hashes, range(80))}
    aggregator = TorrentAggregator(FakeTransport(), test_settings, scrapers)

    torrents = run(aggregator)

    assert len(torrents) == 50
    assert torrents[0].seeds == 79
    assert torrents[-1].seeds == 30


def test_end_to_end_merge(test_settings):
    shared = "1" * 40
    scrapers = {
        "first": make_stub("First", [shared, "2" * 40], [10, 40]),
        "empty": make_stub("Empty"),
        "third": make_stub("Third", ["3" * 40, shared, "4" * 40], [25, 99, 1]),
    }
    aggregator = TorrentAggregator(FakeTransport(), test_settings, scrapers)

    torrents = run(aggregator, year="2020", imdb_id="tt0000000")

    assert [t.seeds for t in torrents] == [40, 25, 10, 1]
    assert [t.source for t in torrents] == ["First", "Third", "First", "Third"]
    for torrent in torrents:
        assert torrent.locator.startswith("magnet:?xt=urn:btih:")
        assert extract_trackers_from_magnet(torrent.locator) == WSS + UDP


def test_failing_and_slow_sources_do_not_block_the_rest(test_settings):
    settings = test_settings.model_copy(update={"RELAY_TIMEOUT": 0.3})
    transport = Transport(FakeSession({"http://relay.local": "hang"}), settings)

    class SlowScraper(BaseScraper):
        name = "Slow"

        async def fetch(self, query, context):
            data = await self.transport.relayed(f"https://slow.test/?q={query}")
            return [self.record(locator=item) for item in data or []]

    scrapers = {
        "slow": SlowScraper,
        "broken": make_stub("Broken", error=RuntimeError("layout changed")),
        "healthy": make_stub("Healthy", ["5" * 40, "6" * 40], [7, 8]),
    }
    aggregator = TorrentAggregator(transport, settings, scrapers)

    start = time.monotonic()
    torrents = run(aggregator)

    assert time.monotonic() - start < 2
    assert [t.source for t in torrents] == ["Healthy", "Healthy"]


def test_identifier_only_source_is_not_called_without_identifier(test_settings):
    spy = make_stub(
        "Spy", ["7" * 40], [1], requires_identifier=True, identifier_fallback=True
    )
    other = make_stub("Other", ["8" * 40], [1])
    aggregator = TorrentAggregator(FakeTransport(), test_settings, {"spy": spy, "other": other})

    torrents = run(aggregator)

    assert spy.calls == []
    assert [t.source for t in torrents] == ["Other"]

    run(aggregator, imdb_id="tt1234567")
    assert spy.calls == ["tt1234567"]


def test_media_type_gates_sources(test_settings):
    anime = make_stub("Anime", ["9" * 40], [1], media_types=(MediaType.ANIME,))
    aggregator = TorrentAggregator(FakeTransport(), test_settings, {"anime": anime})

    assert run(aggregator, media_type=MediaType.MOVIE) == []
    assert len(run(aggregator, media_type=MediaType.ANIME)) == 1


def test_disabled_source_is_skipped(test_settings):
    settings = test_settings.model_copy(update={"SCRAPE_KNABEN": False})
    knaben = make_stub("Knaben", ["a" * 40], [1])
    aggregator = TorrentAggregator(FakeTransport(), settings, {"knaben": knaben})

    assert run(aggregator) == []
    assert knaben.calls == []


def test_no_sources_means_no_results(test_settings):
    aggregator = TorrentAggregator(FakeTransport(), test_settings, {})

    assert run(aggregator) == []


def test_registry_holds_every_source_in_merge_order():
    registry = ScraperManager.discover_scrapers()

    assert list(registry) == [
        "yts",
        "eztv",
        "bitsearch",
        "apibay",
        "solidtorrents",
        "knaben",
        "magnetdl",
        "nyaa",
        "glodls",
        "torrentfunk",
        "torlock",
        "zooqle",
        "torrentgalaxy",
    ]
    assert [cls.name for cls in registry.values()][:4] == ["YTS", "EZTV", "BitSearch", "TPB"]
