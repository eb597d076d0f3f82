"""
Archive download: URL layout, streaming to disk, error translation and the
never-download-twice rule.
"""

import itertools
from pathlib import Path
from unittest.mock import patch

import pytest
import requests

from tfget.core.errors import FilesystemError, TransientNetworkError
from tfget.core.fetcher import archive_path, archive_url, download_file, fetch_archive


def test_archive_url(settings):
    assert archive_url(settings, "1.5.7") == (
        "https://releases.example.test/terraform/1.5.7/terraform_1.5.7_linux_amd64.zip"
    )


def test_archive_path_sits_next_to_entry(settings, cache_dir: Path):
    assert archive_path(settings, "1.5.7") == str(cache_dir / "terraform_1.5.7.zip")


class TestDownloadFile:

    def test_streams_body_to_disk(self, tmp_path: Path, fake_response):
        destination = tmp_path / "out.zip"
        body = b"x" * 200_000
        with patch("tfget.core.fetcher.requests.get",
                   return_value=fake_response(body=body)) as get:
            written = download_file("https://example.test/a.zip", str(destination), 10)
        assert written == len(body)
        assert destination.read_bytes() == body
        get.assert_called_once_with("https://example.test/a.zip", stream=True, timeout=10)

    def test_http_error_removes_partial_file(self, tmp_path: Path, fake_response):
        destination = tmp_path / "out.zip"
        with patch("tfget.core.fetcher.requests.get",
                   return_value=fake_response(status_code=404)):
            with pytest.raises(TransientNetworkError, match="404"):
                download_file("https://example.test/a.zip", str(destination), 10)
        assert not destination.exists()

    def test_connection_error(self, tmp_path: Path):
        with patch("tfget.core.fetcher.requests.get",
                   side_effect=requests.ConnectionError("refused")):
            with pytest.raises(TransientNetworkError, match="refused"):
                download_file("https://example.test/a.zip", str(tmp_path / "a.zip"), 10)

    def test_slow_body_hits_total_deadline(self, tmp_path: Path, fake_response):
        destination = tmp_path / "out.zip"
        # Every clock reading is 0.6s after the previous one
        with patch("tfget.core.fetcher.requests.get",
                   return_value=fake_response(body=b"x" * 200_000)), \
             patch("tfget.core.fetcher.time.monotonic",
                   side_effect=itertools.count(0, 0.6)):
            with pytest.raises(TransientNetworkError, match="within 1.0s"):
                download_file("https://example.test/a.zip", str(destination), 1.0)
        assert not destination.exists()

    def test_unwritable_destination(self, tmp_path: Path, fake_response):
        destination = tmp_path / "missing-dir" / "out.zip"
        with patch("tfget.core.fetcher.requests.get",
                   return_value=fake_response(body=b"data")):
            with pytest.raises(FilesystemError):
                download_file("https://example.test/a.zip", str(destination), 10)


class TestFetchArchive:

    def test_downloads_when_absent(self, settings, cache_dir: Path, fake_response):
        with patch("tfget.core.fetcher.requests.get",
                   return_value=fake_response(body=b"zipdata")) as get:
            path = fetch_archive(settings, "1.5.7")
        assert path == str(cache_dir / "terraform_1.5.7.zip")
        assert Path(path).read_bytes() == b"zipdata"
        assert get.call_count == 1

    def test_skips_network_when_cached(self, settings, cache_dir: Path):
        (cache_dir / "terraform_1.5.7").write_bytes(b"binary")
        with patch("tfget.core.fetcher.requests.get") as get:
            assert fetch_archive(settings, "1.5.7") is None
        get.assert_not_called()
