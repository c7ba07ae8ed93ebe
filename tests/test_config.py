import pytest

from lvjb.cache import CACHE_FILE, Cache
from lvjb.config import CONF_FILE, ArgConfig, Config, PathConfig


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_defaults_match_source():
    config = Config()
    assert config.jar == "out"
    assert config.compiler == "javac"
    assert config.src_ext == "java"
    assert config.classpath == ["bin", "lib/*"]
    assert config.incremental is True
    assert config.version == "0.0.1"
    assert config.entry_point is None
    assert config.paths == PathConfig(
        src="src", src_nopkg="default", bin="bin", lib="lib",
        test="test", docs="docs", releases="releases",
    )
    assert config.args == ArgConfig()


def test_default_creates_lock_file(tmp_path):
    config = Config.default()
    assert config.cache == Cache()
    assert (tmp_path / CACHE_FILE).exists()


def test_default_reads_existing_lock_file():
    Cache(url_libs=["u"]).write()
    assert Config.default().cache.url_libs == ["u"]


def test_write_load_round_trip(tmp_path):
    config = Config(
        entry_point="com.example.Main",
        args=ArgConfig(runtime=["a", "b"], jvm=["-Xmx64m"]),
        pre_build_cmds=["echo hi"],
        log_level=2,
        cache=Cache(files={"x.java": "1"}),
    )
    config.write()
    assert (tmp_path / CONF_FILE).exists()
    assert Config.load() == config


def test_to_dict_omits_missing_optionals():
    data = Config().to_dict()
    assert "entry_point" not in data
    assert data["args"] == {}


def test_partial_file_takes_defaults_and_lock_cache(tmp_path):
    Cache(files={"k": "9"}).write()
    (tmp_path / CONF_FILE).write_text('jar = "app"\n[paths]\nsrc = "source"\n', encoding="utf-8")
    config = Config.load()
    assert config.jar == "app"
    assert config.paths.src == "source"
    assert config.paths.bin == "bin"
    assert config.compiler == "javac"
    assert config.cache.files == {"k": "9"}


def test_load_missing_raises():
    with pytest.raises(FileNotFoundError):
        Config.load()


def test_log_level_out_of_range():
    with pytest.raises(ValueError):
        Config.from_dict({"log_level": 300, "cache": {}})


def test_wrong_types_rejected():
    with pytest.raises(TypeError):
        Config.from_dict({"incremental": "yes", "cache": {}})
    with pytest.raises(TypeError):
        Config.from_dict({"classpath": "bin", "cache": {}})
    with pytest.raises(TypeError):
        ArgConfig.from_dict({"runtime": [1]})


def test_path_config_round_trip():
    paths = PathConfig(src="s", bin="b")
    assert PathConfig.from_dict(paths.to_dict()) == paths