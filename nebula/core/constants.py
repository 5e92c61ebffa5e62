import re

INFO_HASH_PATTERN = re.compile(r"btih:([a-fA-F0-9]{40}|[a-zA-Z0-9]{32})", re.IGNORECASE)
BARE_HASH_PATTERN = re.compile(r"^(?:[a-fA-F0-9]{40}|[a-zA-Z2-7]{32})$")
TRACKER_PATTERN = re.compile(r"[&?]tr=([^&]+)")

QUALITY_4K = "4K"
QUALITY_1080P = "1080p"
QUALITY_720P = "720p"
QUALITY_HD = "HD"
QUALITY_UNKNOWN = "Unknown"
