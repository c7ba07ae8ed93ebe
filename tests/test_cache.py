import tomllib

import pytest

from lvjb.cache import CACHE_FILE, Cache


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_default_is_empty():
    cache = Cache()
    assert cache.files == {}
    assert cache.releases == []
    assert cache.url_libs == []


def test_round_trip_through_default_file(tmp_path):
    cache = Cache(
        files={"src/default/Main.java": "12345"},
        releases=[("out-0.0.1.jar", "12345")],
        url_libs=["https://example.com/lib.jar"],
    )
    cache.write()
    assert (tmp_path / CACHE_FILE).exists()
    assert Cache.load() == cache


def test_round_trip_explicit_path(tmp_path):
    target = tmp_path / "other.lock"
    cache = Cache(files={"a": "1", "b": "2"})
    cache.write(target)
    assert Cache.load(target) == cache


def test_load_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        Cache.load()


def test_load_malformed_raises(tmp_path):
    (tmp_path / CACHE_FILE).write_text("files = [", encoding="utf-8")
    with pytest.raises(tomllib.TOMLDecodeError):
        Cache.load()


def test_partial_file_takes_defaults(tmp_path):
    (tmp_path / CACHE_FILE).write_text('url_libs = ["x"]\n', encoding="utf-8")
    cache = Cache.load()
    assert cache.url_libs == ["x"]
    assert cache.files == {}
    assert cache.releases == []


def test_from_dict_rejects_bad_types():
    with pytest.raises(TypeError):
        Cache.from_dict({"files": {"a": 1}})
    with pytest.raises(TypeError):
        Cache.from_dict({"releases": [["only-one"]]})
    with pytest.raises(TypeError):
        Cache.from_dict({"url_libs": "not-a-list"})


def test_to_dict_drops_empty_releases():
    cache = Cache(releases=[None, ("a.jar", "7")])
    assert cache.to_dict()["releases"] == [["a.jar", "7"]]


def test_from_dict_reads_release_pairs_as_tuples():
    cache = Cache.from_dict({"releases": [["a.jar", "7"]]})
    assert cache.releases == [("a.jar", "7")]