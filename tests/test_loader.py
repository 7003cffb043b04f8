import pytest

from pqc_checker.exceptions import InputError
from pqc_checker.loader import UrlLoader


def test_single_url():
    assert UrlLoader().resolve(["https://example.com"]) == ["https://example.com"]


def test_several_urls():
    assert UrlLoader().resolve(["https://a.com", "https://b.com"]) == ["https://a.com", "https://b.com"]


def test_file_of_urls_skips_blank_lines(tmp_path):
    url_file = tmp_path / "urls.txt"
    url_file.write_bytes(b"https://a.com\r\n\r\n   \nhttps://b.com\n\n")

    assert UrlLoader().resolve([str(url_file)]) == ["https://a.com", "https://b.com"]


def test_empty_file_is_an_input_error(tmp_path):
    url_file = tmp_path / "urls.txt"
    url_file.write_text("\n\n  \n", encoding="utf-8")

    with pytest.raises(InputError):
        UrlLoader().resolve([str(url_file)])


def test_no_arguments_is_an_input_error():
    with pytest.raises(InputError):
        UrlLoader().resolve([])


def test_missing_file_is_treated_as_url(tmp_path):
    missing = str(tmp_path / "nope.txt")
    assert UrlLoader().resolve([missing]) == [missing]


def test_non_utf8_file_is_read(tmp_path):
    url_file = tmp_path / "urls.txt"
    url_file.write_bytes("https://caf\xe9.example\nhttps://b.com\n".encode("latin-1"))

    assert UrlLoader().resolve([str(url_file)]) == ["https://caf�.example", "https://b.com"]
