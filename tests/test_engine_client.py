import asyncio
import time

import aiohttp
import pytest

from nebula.engine.client import TorrentEngineClient
from nebula.engine.exceptions import TorrentEngineError, TorrentSessionNotFound

from conftest import EngineResponse, EngineSession


def test_add_torrent_posts_locator():
    session = EngineSession(
        EngineResponse(
            200,
            {"id": 7, "infoHash": "ab" * 20, "files": [{"name": "movie.mkv", "length": 10}]},
        )
    )
    client = TorrentEngineClient(session, "http://engine.test/")

    result = asyncio.run(client.add_torrent("magnet:?xt=urn:btih:x"))

    assert session.requests == [
        ("POST", "http://engine.test/api/torrent/add", {"json": {"magnet": "magnet:?xt=urn:btih:x"}})
    ]
    assert result == {
        "session_id": "7",
        "info_hash": "ab" * 20,
        "files": [{"name": "movie.mkv", "length": 10}],
    }


def test_status_maps_engine_fields():
    session = EngineSession(
        EngineResponse(200, {"downloaded": 1024, "downloadSpeed": 512.5, "peers": 4, "progress": 0.1})
    )
    client = TorrentEngineClient(session, "http://engine.test")

    status = asyncio.run(client.status("7"))

    assert session.requests[0][:2] == ("GET", "http://engine.test/api/torrent/7/status")
    assert status == {"downloaded": 1024, "rate": 512.5, "peer_count": 4}


def test_stream_url():
    client = TorrentEngineClient(EngineSession(), "http://engine.test")

    assert client.stream_url("7", 2) == "http://engine.test/api/torrent/7/stream/2"


def test_unknown_session():
    client = TorrentEngineClient(EngineSession(EngineResponse(404)), "http://engine.test")

    with pytest.raises(TorrentSessionNotFound) as excinfo:
        asyncio.run(client.remove("missing"))

    assert excinfo.value.status == 404
    assert excinfo.value.session_id == "missing"


def test_engine_error_carries_message():
    session = EngineSession(EngineResponse(500, {"error": "Invalid magnet"}))
    client = TorrentEngineClient(session, "http://engine.test")

    with pytest.raises(TorrentEngineError) as excinfo:
        asyncio.run(client.add_torrent("nonsense"))

    assert excinfo.value.status == 500
    assert excinfo.value.display_message == "Invalid magnet"


def test_unreachable_engine():
    session = EngineSession(error=aiohttp.ClientConnectionError("refused"))
    client = TorrentEngineClient(session, "http://engine.test")

    with pytest.raises(TorrentEngineError) as excinfo:
        asyncio.run(client.status("7"))

    assert excinfo.value.display_message == "Torrent engine is unreachable."


def test_slow_engine_is_cut_off():
    session = EngineSession(EngineResponse(200, {"id": 1}, hang=True))
    client = TorrentEngineClient(session, "http://engine.test", timeout=0.2)

    start = time.monotonic()
    with pytest.raises(TorrentEngineError) as excinfo:
        asyncio.run(client.add_torrent("magnet:?xt=urn:btih:x"))

    assert time.monotonic() - start < 2
    assert excinfo.value.display_message == "Torrent engine took too long to answer."
