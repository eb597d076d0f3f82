"""
Shared test fixtures and configuration.
"""

import io
import zipfile
from pathlib import Path

import pytest
import requests

from tfget.core.manager import VersionManager
from tfget.utils.config import Settings


class FakeResponse:
    """Just enough of requests.Response for the code under test."""

    def __init__(self, body: bytes = b"", status_code: int = 200, text: str = ""):
        self.body = body or text.encode("utf-8")
        self.status_code = status_code
        self.text = text
        self.encoding = "utf-8"
        self.headers = {"content-length": str(len(self.body))} if self.body else {}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start:start + chunk_size]


def build_zip(members: dict, mode: int = 0o755) -> bytes:
    """Zip {name: content} in memory with the given unix mode bits."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in members.items():
            info = zipfile.ZipInfo(name)
            info.external_attr = (0o100000 | mode) << 16
            archive.writestr(info, content)
    return buffer.getvalue()


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Return an existing, empty version cache directory."""
    path = tmp_path / "versions"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, cache_dir: Path) -> Settings:
    return Settings(
        releases_url="https://releases.example.test/terraform/",
        cache_dir=str(cache_dir),
        system_install_path=str(tmp_path / "usr-local-bin" / "terraform"),
        product="terraform",
        timeout=10,
        max_extract_bytes=1024 * 1024,
        platform="linux_amd64",
    )


@pytest.fixture
def manager(settings: Settings) -> VersionManager:
    return VersionManager(settings)


@pytest.fixture
def release_server():
    """Build a requests.get side effect serving an index page and archives."""

    def serve(index_html: str = "", archive: bytes = b""):
        def get(url, **kwargs):
            if url.endswith(".zip"):
                return FakeResponse(body=archive)
            return FakeResponse(text=index_html)
        return get

    return serve
