from typing import Iterable, List
from urllib.parse import quote

from nebula.core.constants import BARE_HASH_PATTERN
from nebula.scrapers.models import TorrentRecord
from nebula.services.torrent_manager import extract_trackers_from_magnet


def tracker_params(trackers: Iterable[str]):
    return "".join(f"&tr={quote(tracker, safe='')}" for tracker in trackers)


def enrich_locator(locator: str, title: str, trackers: List[str]):
    """
    Make a locator announce to every configured tracker.

    Magnets get the trackers they are missing appended, bare hashes become a
    full magnet, anything else (direct .torrent links) is returned as is.
    """
    trackers = list(dict.fromkeys(trackers))

    if locator.lower().startswith("magnet:"):
        present = set(extract_trackers_from_magnet(locator))
        missing = [tracker for tracker in trackers if tracker not in present]
        return locator + tracker_params(missing)

    if BARE_HASH_PATTERN.match(locator):
        display_name = quote(title or locator, safe="")
        return (
            f"magnet:?xt=urn:btih:{locator}&dn={display_name}"
            + tracker_params(trackers)
        )

    return locator


def enrich_trackers(torrents: Iterable[TorrentRecord], trackers: List[str]):
    return [
        torrent.model_copy(
            update={
                "locator": enrich_locator(
                    torrent.locator, torrent.release_title, trackers
                )
            }
        )
        for torrent in torrents
    ]
