"""
OPML import/export.

Handles OPML file parsing and generation. Category outlines map to
feed groups.
"""

import io
from datetime import datetime, timezone
from typing import Any
from xml.etree import ElementTree as ET


class OPMLFeed:
    """OPML feed entry."""

    def __init__(
        self, title: str, xml_url: str, html_url: str | None = None, group: str | None = None
    ):
        """
        Initialize OPML feed entry.

        Args:
            title: Feed title.
            xml_url: Feed XML URL.
            html_url: Optional feed website URL.
            group: Name of the enclosing category outline, if any.
        """
        self.title = title
        self.xml_url = xml_url
        self.html_url = html_url
        self.group = group


def _walk(element: ET.Element, group: str | None, feeds: list[OPMLFeed]) -> None:
    for outline in element.findall("outline"):
        xml_url = outline.get("xmlUrl")
        title = outline.get("title") or outline.get("text", "")
        if xml_url:
            feeds.append(
                OPMLFeed(
                    title=title or xml_url,
                    xml_url=xml_url,
                    html_url=outline.get("htmlUrl"),
                    group=group,
                )
            )
        else:
            # Category outline; nested categories are flattened to the outermost one
            _walk(outline, group or title or None, feeds)


def parse_opml(content: str) -> list[OPMLFeed]:
    """
    Parse OPML file.

    Args:
        content: OPML XML content.

    Returns:
        List of OPML feed entries.

    Raises:
        ValueError: If OPML parsing fails.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ValueError(f"Invalid OPML format: {e}")

    feeds: list[OPMLFeed] = []
    body = root.find("body")
    if body is None:
        return feeds

    _walk(body, None, feeds)
    return feeds


def generate_opml(feeds: list[dict[str, Any]], title: str = "Fusion Subscriptions") -> str:
    """
    Generate OPML file from feeds.

    Args:
        feeds: List of feed dictionaries with 'title', 'url' and optional 'group'.
        title: OPML document title.

    Returns:
        OPML XML string.
    """
    opml = ET.Element("opml", version="2.0")

    head = ET.SubElement(opml, "head")
    title_elem = ET.SubElement(head, "title")
    title_elem.text = title

    date_created = ET.SubElement(head, "dateCreated")
    date_created.text = datetime.now(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S GMT")

    body = ET.SubElement(opml, "body")
    categories: dict[str, ET.Element] = {}

    for feed in feeds:
        parent = body
        group = feed.get("group")
        if group:
            if group not in categories:
                categories[group] = ET.SubElement(body, "outline", text=group, title=group)
            parent = categories[group]

        outline = ET.SubElement(
            parent,
            "outline",
            type="rss",
            text=feed.get("title", ""),
            title=feed.get("title", ""),
            xmlUrl=feed.get("url", ""),
        )
        if feed.get("site_url"):
            outline.set("htmlUrl", feed["site_url"])

    tree = ET.ElementTree(opml)
    ET.indent(tree, space="  ")

    output = io.BytesIO()
    tree.write(output, encoding="utf-8", xml_declaration=True)
    return output.getvalue().decode("utf-8")
