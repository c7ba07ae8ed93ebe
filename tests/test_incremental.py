from pathlib import Path

import pytest

from lvjb.config import Config
from lvjb.incremental import check_incremental, content_hash


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_content_hash_deterministic_and_64_bit():
    first = content_hash(b"class A {}")
    assert first == content_hash(b"class A {}")
    assert 0 <= first < 2**64
    assert content_hash(b"class B {}") != first


def test_first_check_records_hash():
    Path("A.java").write_text("class A {}")
    config = Config()
    assert check_incremental(Path("A.java"), config) is True
    assert config.cache.files["A.java"] == str(content_hash(b"class A {}"))


def test_unchanged_file_is_skipped():
    Path("A.java").write_text("class A {}")
    config = Config()
    check_incremental(Path("A.java"), config)
    assert check_incremental(Path("A.java"), config) is False


def test_changed_file_is_rebuilt():
    source = Path("A.java")
    source.write_text("class A {}")
    config = Config()
    check_incremental(source, config)
    source.write_text("class A { int x; }")
    assert check_incremental(source, config) is True
    assert config.cache.files["A.java"] == str(content_hash(b"class A { int x; }"))


def test_missing_file_counts_as_changed_and_is_not_recorded():
    config = Config()
    assert check_incremental(Path("Gone.java"), config) is True
    assert config.cache.files == {}


def test_non_utf8_file_counts_as_changed():
    Path("Bad.java").write_bytes(b"\xff\xfe\x00")
    config = Config()
    assert check_incremental(Path("Bad.java"), config) is True
    assert config.cache.files == {}


def test_garbage_cached_value_is_replaced():
    Path("A.java").write_text("x")
    config = Config()
    config.cache.files["A.java"] = "not-a-number"
    assert check_incremental(Path("A.java"), config) is True
    assert config.cache.files["A.java"] == str(content_hash(b"x"))