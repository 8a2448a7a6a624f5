"""Tests for OPML import/export."""

import pytest

from fusion_rss import generate_opml, parse_opml


def test_parse_nested_categories() -> None:
    content = """<?xml version="1.0"?>
<opml version="1.0">
  <body>
    <outline text="Tech">
      <outline text="Deep">
        <outline text="Nested" xmlUrl="https://nested.example.com/rss"/>
      </outline>
      <outline title="Titled" text="ignored" xmlUrl="https://titled.example.com/rss"
               htmlUrl="https://titled.example.com/"/>
    </outline>
    <outline xmlUrl="https://untitled.example.com/rss"/>
  </body>
</opml>"""

    feeds = parse_opml(content)

    assert [(f.title, f.group) for f in feeds] == [
        ("Nested", "Tech"),
        ("Titled", "Tech"),
        ("https://untitled.example.com/rss", None),
    ]
    assert feeds[1].html_url == "https://titled.example.com/"


def test_parse_without_body() -> None:
    assert parse_opml("<opml version='2.0'><head/></opml>") == []


def test_parse_invalid_xml() -> None:
    with pytest.raises(ValueError):
        parse_opml("not xml")


def test_generate_groups_feeds_by_category() -> None:
    content = generate_opml(
        [
            {"title": "One", "url": "https://one.example.com/rss", "group": "Tech"},
            {"title": "Two", "url": "https://two.example.com/rss", "group": "Tech"},
            {"title": "Three", "url": "https://three.example.com/rss"},
        ]
    )

    feeds = parse_opml(content)
    assert [(f.title, f.xml_url, f.group) for f in feeds] == [
        ("One", "https://one.example.com/rss", "Tech"),
        ("Two", "https://two.example.com/rss", "Tech"),
        ("Three", "https://three.example.com/rss", None),
    ]
    assert content.count('text="Tech"') == 1
