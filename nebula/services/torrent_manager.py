import base64
import binascii
from typing import Iterable, List
from urllib.parse import unquote

from nebula.core.constants import (BARE_HASH_PATTERN, INFO_HASH_PATTERN,
                                   TRACKER_PATTERN)
from nebula.core.logger import logger
from nebula.scrapers.models import TorrentRecord


def normalize_info_hash(info_hash: str):
    """Return the 40-char lowercase hex form of a hex or base32 info hash."""
    if len(info_hash) == 32:
        try:
            return binascii.hexlify(base64.b32decode(info_hash.upper())).decode()
        except (binascii.Error, ValueError):
            return info_hash.lower()
    return info_hash.lower()


def extract_info_hash(locator: str):
    match = INFO_HASH_PATTERN.search(locator)
    if match:
        return normalize_info_hash(match.group(1))

    candidate = locator.strip()
    if BARE_HASH_PATTERN.match(candidate):
        return normalize_info_hash(candidate)

    return None


def extract_trackers_from_magnet(magnet_uri: str):
    try:
        trackers = TRACKER_PATTERN.findall(magnet_uri)
        return [unquote(tracker) for tracker in trackers]
    except Exception as e:
        logger.warning(f"Failed to extract trackers from magnet URI: {e}")
        return []


def dedup_key(torrent: TorrentRecord):
    return extract_info_hash(torrent.locator) or torrent.locator.lower()


def deduplicate(torrents: Iterable[TorrentRecord]) -> List[TorrentRecord]:
    seen_hashes = set()
    unique = []
    for torrent in torrents:
        key = dedup_key(torrent)
        if key in seen_hashes:
            continue

        seen_hashes.add(key)
        unique.append(torrent)

    return unique
