"""
Link Extractor Tests
"""

import pytest
from bs4.builder import ParserRejectedMarkup

import scraper
from scraper import extract_next_links, is_valid, ParseError


BASE = "https://x.com/"


def test_path_absolute_href_joined_with_single_slash():
    html = '<a href="/a/b">ab</a>'
    assert extract_next_links(html, BASE) == ["https://x.com/a/b"]


def test_path_absolute_href_under_base_without_trailing_slash():
    html = '<a href="/page">p</a>'
    assert extract_next_links(html, "https://x.com") == ["https://x.com/page"]


def test_out_of_scope_links_dropped():
    html = """
    <a href="https://x.com/a">In</a>
    <a href="https://other.com/">Other</a>
    <a href="http://x.com/insecure">Scheme</a>
    <a href="mailto:me@x.com">Mail</a>
    <a href="#top">Fragment</a>
    <a href="page.html">Relative</a>
    """
    assert extract_next_links(html, BASE) == ["https://x.com/a"]


def test_protocol_relative_href_not_treated_as_path():
    html = '<a href="//cdn.other.com/lib.js">cdn</a><a href="//x.com/a">x</a>'
    assert extract_next_links(html, BASE) == []


def test_whitespace_trimmed():
    html = '<a href="  /spaced  ">s</a><a href="\n https://x.com/nl \n">n</a>'
    assert extract_next_links(html, BASE) == [
        "https://x.com/spaced", "https://x.com/nl"]


def test_document_order_and_duplicates_kept():
    html = """
    <p><a href="/b">b</a></p>
    <a href="/a">a</a>
    <a href="https://x.com/b">b again</a>
    <a>no href</a>
    """
    assert extract_next_links(html, BASE) == [
        "https://x.com/b", "https://x.com/a", "https://x.com/b"]


def test_every_result_starts_with_prefix():
    prefix = "https://x.com/docs/"
    html = """
    <a href="/intro">intro</a>
    <a href="https://x.com/blog/post">blog</a>
    <a href="https://x.com/docs/api">api</a>
    <a href="https://x.com/">home</a>
    """
    links = extract_next_links(html, prefix)
    assert links == ["https://x.com/docs/intro", "https://x.com/docs/api"]
    assert all(link.startswith(prefix) for link in links)


def test_empty_document():
    assert extract_next_links("", BASE) == []
    assert extract_next_links("<html></html>", BASE) == []


def test_is_valid():
    assert is_valid("https://x.com/a", BASE)
    assert not is_valid("https://other.com/", BASE)
    assert not is_valid("", BASE)
    assert not is_valid("https://x.com/a\nb", BASE)


def test_scraper_decodes_bytes():
    body = '<a href="/café">c</a>'.encode("utf-8")
    assert scraper.scraper(BASE, body, BASE) == ["https://x.com/café"]


def test_scraper_tolerates_invalid_utf8():
    body = b'<a href="/ok">\xff\xfe</a>'
    assert scraper.scraper(BASE, body, BASE) == ["https://x.com/ok"]


def test_scraper_wraps_parser_rejection(monkeypatch):
    def reject(html, base_url):
        raise ParserRejectedMarkup("unparseable")

    monkeypatch.setattr(scraper, "extract_next_links", reject)
    with pytest.raises(ParseError):
        scraper.scraper(BASE, b"<<<", BASE)
