from typing import Iterable, List

from nebula.scrapers.models import TorrentRecord


def rank_torrents(torrents: Iterable[TorrentRecord], max_results: int) -> List[TorrentRecord]:
    # Python's sort is stable, so merge order settles whatever ties remain.
    ranked = sorted(torrents, key=lambda t: (-t.seeds, -t.peers, t.source.lower()))
    return ranked[:max_results]
