# File: tests/test_utils.py
from site_indexer.utils import (
    ensure_seed_file,
    get_seed_list_contents,
    parse_seed_list,
    read_seeds,
    save_seed_list,
)


def test_ensure_seed_file_creates_missing(tmp_path):
    path = ensure_seed_file(tmp_path / "nested" / "seeds.txt")
    assert path.is_file()
    assert path.read_text(encoding="utf-8") == ""


def test_ensure_seed_file_keeps_existing(tmp_path):
    path = tmp_path / "seeds.txt"
    path.write_text("http://a.com", encoding="utf-8")
    ensure_seed_file(path)
    assert get_seed_list_contents(path) == "http://a.com"


def test_save_overwrites_and_trims(tmp_path):
    path = tmp_path / "seeds.txt"
    save_seed_list(path, "http://old.com")
    save_seed_list(path, "\n\n http://a.com\nhttp://b.com \n")
    assert get_seed_list_contents(path) == "http://a.com\nhttp://b.com"


def test_read_seeds_preserves_order_and_drops_blanks(tmp_path):
    path = tmp_path / "seeds.txt"
    save_seed_list(path, "http://z.com\n\n   \n  http://a.com  \nnot a url\nhttp://z.com")
    assert read_seeds(path) == ["http://z.com", "http://a.com", "not a url", "http://z.com"]


def test_read_seeds_missing_file_is_empty(tmp_path):
    assert read_seeds(tmp_path / "absent.txt") == []


def test_parse_seed_list_handles_crlf():
    assert parse_seed_list("http://a.com\r\nhttp://b.com\r\n") == ["http://a.com", "http://b.com"]
