from typing import Annotated, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_RELAY_URLS = [
    "https://corsproxy.io/?",
    "https://api.allorigins.win/raw?url=",
]

# Browser peers can only announce to WebSocket trackers.
DEFAULT_WSS_TRACKERS = [
    "wss://tracker.btorrent.xyz",
    "wss://tracker.openwebtorrent.com",
    "wss://tracker.webtorrent.dev",
    "wss://tracker.files.fm:7073/announce",
    "wss://peertube.cpy.re/tracker/socket",
    "wss://open.tube/tracker/socket",
]

DEFAULT_UDP_TRACKERS = [
    "udp://open.demonii.com:1337/announce",
    "udp://tracker.openbittorrent.com:80",
    "udp://tracker.coppersurfer.tk:6969",
    "udp://glotorrents.pw:6969/announce",
    "udp://tracker.opentrackr.org:1337/announce",
    "udp://torrent.gresille.org:80/announce",
    "udp://p4p.arenabg.com:1337",
    "udp://tracker.leechers-paradise.org:6969",
]

CommaList = Annotated[List[str], NoDecode]


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    FASTAPI_HOST: Optional[str] = "0.0.0.0"
    FASTAPI_PORT: Optional[int] = 8000
    FASTAPI_WORKERS: Optional[int] = 1
    LOG_LEVEL: Optional[str] = "DEBUG"
    USER_AGENT: Optional[str] = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    HTTP_CLIENT_LIMIT: Optional[int] = 100
    HTTP_CLIENT_LIMIT_PER_HOST: Optional[int] = 20
    HTTP_CLIENT_TTL_DNS_CACHE: Optional[int] = 300
    HTTP_CLIENT_KEEPALIVE_TIMEOUT: Optional[float] = 15.0
    HTTP_CLIENT_TIMEOUT_TOTAL: Optional[float] = 30.0

    DIRECT_TIMEOUT: Optional[float] = 8.0
    RELAY_TIMEOUT: Optional[float] = 6.0
    MAX_RESULTS: Optional[int] = 50

    RELAY_URLS: CommaList = DEFAULT_RELAY_URLS
    WSS_TRACKERS: CommaList = DEFAULT_WSS_TRACKERS
    UDP_TRACKERS: CommaList = DEFAULT_UDP_TRACKERS

    SCRAPE_YTS: Optional[bool] = True
    YTS_URL: Optional[str] = "https://yts.mx/api/v2"
    SCRAPE_EZTV: Optional[bool] = True
    EZTV_URL: Optional[str] = "https://eztv.re/api"
    SCRAPE_APIBAY: Optional[bool] = True
    APIBAY_URL: Optional[str] = "https://apibay.org"
    SCRAPE_SOLIDTORRENTS: Optional[bool] = True
    SOLIDTORRENTS_URL: Optional[str] = "https://solidtorrents.to/api/v1"
    SCRAPE_BITSEARCH: Optional[bool] = True
    BITSEARCH_URL: Optional[str] = "https://bitsearch.to"
    SCRAPE_KNABEN: Optional[bool] = True
    KNABEN_URL: Optional[str] = "https://knaben.eu"
    SCRAPE_MAGNETDL: Optional[bool] = True
    MAGNETDL_URL: Optional[str] = "https://www.magnetdl.com"
    SCRAPE_NYAA: Optional[bool] = True
    NYAA_URL: Optional[str] = "https://nyaa.si"
    SCRAPE_GLODLS: Optional[bool] = True
    GLODLS_URL: Optional[str] = "https://glodls.to"
    SCRAPE_TORRENTFUNK: Optional[bool] = True
    TORRENTFUNK_URL: Optional[str] = "https://www.torrentfunk.com"
    SCRAPE_TORLOCK: Optional[bool] = True
    TORLOCK_URL: Optional[str] = "https://www.torlock.com"
    SCRAPE_ZOOQLE: Optional[bool] = True
    ZOOQLE_URL: Optional[str] = "https://zooqle.com"
    SCRAPE_TORRENTGALAXY: Optional[bool] = True
    TORRENTGALAXY_URL: Optional[str] = "https://tgx.rs"

    TORRENT_ENGINE_URL: Optional[str] = "http://localhost:3001"
    # The engine only answers /add once torrent metadata has arrived
    ENGINE_TIMEOUT: Optional[float] = 30.0

    @field_validator(
        "YTS_URL",
        "EZTV_URL",
        "APIBAY_URL",
        "SOLIDTORRENTS_URL",
        "BITSEARCH_URL",
        "KNABEN_URL",
        "MAGNETDL_URL",
        "NYAA_URL",
        "GLODLS_URL",
        "TORRENTFUNK_URL",
        "TORLOCK_URL",
        "ZOOQLE_URL",
        "TORRENTGALAXY_URL",
        "TORRENT_ENGINE_URL",
    )
    def remove_trailing_slash(cls, v):
        if v and v.endswith("/"):
            return v[:-1]
        return v

    @field_validator("RELAY_URLS", "WSS_TRACKERS", "UDP_TRACKERS", mode="before")
    def split_comma_separated(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("LOG_LEVEL")
    def normalize_log_level(cls, v):
        return v.upper() if v else "DEBUG"

    def is_scraper_enabled(self, name: str):
        return bool(getattr(self, f"SCRAPE_{name.upper()}", True))

    def scraper_url(self, name: str):
        return getattr(self, f"{name.upper()}_URL", None)

    @property
    def trackers(self):
        return list(dict.fromkeys([*self.WSS_TRACKERS, *self.UDP_TRACKERS]))


settings = AppSettings()
