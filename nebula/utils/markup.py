import xml.etree.ElementTree as ET

from bs4 import BeautifulSoup


def parse_html(html: str):
    return BeautifulSoup(html, "html.parser")


def parse_xml(xml_text: str):
    return ET.fromstring(xml_text)


def node_text(node, default: str = None):
    if node is None:
        return default
    text = node.get_text(" ", strip=True)
    return text or default


def cell_text(cells, index: int, default: str = None):
    if index >= len(cells):
        return default
    return node_text(cells[index], default)


def magnet_href(node):
    link = node.select_one('a[href^="magnet:"]')
    if link is None:
        return None
    return link.get("href") or None
