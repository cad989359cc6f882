# -*- coding: utf-8 -*-
import pytest
import requests

from common.network_utils import USER_AGENT, check_connectivity, download_file


def test_check_connectivity_ok(mocker, app_settings, mock_logger):
    mock_head = mocker.patch("common.network_utils.requests.head")

    assert check_connectivity(app_settings, current_logger=mock_logger) is True
    mock_head.assert_called_once_with("https://github.com", timeout=10, allow_redirects=True)


def test_check_connectivity_failure(mocker, app_settings, mock_logger):
    mocker.patch(
        "common.network_utils.requests.head",
        side_effect=requests.exceptions.ConnectionError("no route to host"),
    )

    assert check_connectivity(app_settings, current_logger=mock_logger) is False
    assert "no route to host" in mock_logger.error.call_args.args[0]


def test_download_file_streams_chunks(mocker, app_settings, tmp_path, mock_logger):
    mock_get = mocker.patch("common.network_utils.requests.get")
    response = mock_get.return_value.__enter__.return_value
    response.iter_content.return_value = [b"abc", b"", b"def"]
    destination = tmp_path / "downloads" / "paperless.conf.example"

    assert download_file("https://example.org/x", destination, app_settings, 5, mock_logger) == destination

    assert destination.read_bytes() == b"abcdef"
    mock_get.assert_called_once_with(
        "https://example.org/x", stream=True, timeout=5, headers={"User-Agent": USER_AGENT}
    )


def test_download_file_http_error(mocker, app_settings, tmp_path, mock_logger):
    mock_get = mocker.patch("common.network_utils.requests.get")
    response = mock_get.return_value.__enter__.return_value
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Not Found")

    with pytest.raises(requests.exceptions.HTTPError):
        download_file("https://example.org/missing", tmp_path / "x", app_settings, current_logger=mock_logger)
    assert not (tmp_path / "x").exists()


def test_download_file_removes_partial_file(mocker, app_settings, tmp_path, mock_logger):
    def _chunks(chunk_size):
        yield b"first half"
        raise requests.exceptions.ChunkedEncodingError("connection reset")

    mock_get = mocker.patch("common.network_utils.requests.get")
    mock_get.return_value.__enter__.return_value.iter_content.side_effect = _chunks
    destination = tmp_path / "paperless-ngx-v2.7.2.tar.xz"

    with pytest.raises(requests.exceptions.ChunkedEncodingError):
        download_file("https://example.org/archive", destination, app_settings, current_logger=mock_logger)

    assert not destination.exists()
