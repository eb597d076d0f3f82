#!/usr/bin/env python3

"""
Release index scraping.

The index page is a plain listing of the form::

    <li>
      <a href="/terraform/1.5.7/">terraform_1.5.7</a>
    </li>

Nothing but that markup shape is relied on. If the page layout changes the
scraper does not fail loudly: it returns an empty or incomplete catalog.
"""

import time
from html.parser import HTMLParser
from typing import List, Optional

import requests
from colorama import Fore, Style

from .errors import TransientNetworkError
from .fetcher import iter_with_deadline
from ..utils.versions import sort_versions


class ReleaseIndexParser(HTMLParser):
    """Collects the first text token inside every <li> element"""

    def __init__(self, product: str):
        super().__init__(convert_charrefs=True)
        self.product = product
        self.versions: List[str] = []
        self._awaiting_text = False

    def handle_starttag(self, tag, attrs):
        if tag == "li":
            self._awaiting_text = True

    def handle_endtag(self, tag):
        if tag == "li":
            self._awaiting_text = False

    def handle_data(self, data):
        if not self._awaiting_text:
            return
        text = data.strip()
        # Whitespace between <li> and <a> is not the token we want
        if not text:
            return
        self._awaiting_text = False
        version = self._version_from_text(text)
        if version:
            self.versions.append(version)

    def _version_from_text(self, text: str) -> Optional[str]:
        # "terraform_1.5.7" -> "1.5.7"
        if self.product not in text:
            return None
        fields = text.split("_")
        if len(fields) < 2 or not fields[1]:
            return None
        return fields[1]


def parse_versions(markup: str, product: str = "terraform") -> List[str]:
    """Extract version identifiers from release index HTML, newest first"""
    parser = ReleaseIndexParser(product)
    parser.feed(markup)
    parser.close()
    return sort_versions(parser.versions)


def fetch_index(url: str, timeout: float) -> str:
    """GET the release index page within timeout seconds and return its body"""
    print(f"📥 Fetching release index from {Fore.CYAN}{url}{Style.RESET_ALL}")
    started = time.monotonic()
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            body = b"".join(iter_with_deadline(response, started, timeout))
            encoding = response.encoding or "utf-8"
    except requests.RequestException as e:
        raise TransientNetworkError(f"Failed to fetch release index {url}: {e}") from e
    return body.decode(encoding, errors="replace")


def list_remote_versions(url: str, product: str, timeout: float) -> List[str]:
    """Fetch and parse the release index. Rebuilt on every call, never cached."""
    return parse_versions(fetch_index(url, timeout), product)
