from urllib.parse import quote, quote_plus


def build_relay_url(relay: str, url: str):
    """
    Wrap ``url`` so it is fetched through ``relay``.

    A relay either carries a ``{URL}`` placeholder (``https://relay.example/get?u={URL}``)
    or is a plain prefix the encoded target gets appended to
    (``https://corsproxy.io/?``).
    """
    if "{URL}" in relay:
        return relay.replace("{URL}", quote_plus(url))
    return f"{relay}{quote(url, safe='')}"
