# tests/test_utils.py - config, metrics, log file and reader/writer lock
import io
import json
import threading
import time

import pytest
from rich.console import Console

from query_autocomplete.utils.config_manager import DEFAULTS, Config
from query_autocomplete.utils.logger_utils import Log
from query_autocomplete.utils.metrics_tracker import Metrics
from query_autocomplete.utils.rwlock import ReadWriteLock


def test_config_defaults_in_memory():
    cfg = Config()
    assert cfg.get("default_k") == 5
    assert cfg.get("seed_default_corpus") is True
    cfg.set("show_timing", "yes")
    assert cfg.get("show_timing") is True


def test_config_file_roundtrip(tmp_path):
    path = tmp_path / "config.json"
    cfg = Config(str(path))
    cfg.set("default_k", "7")
    assert json.loads(path.read_text(encoding="utf8"))["default_k"] == 7
    assert Config(str(path)).get("default_k") == 7


def test_config_unknown_key():
    with pytest.raises(KeyError):
        Config().set("theme", "dark")


def test_config_bad_file_keeps_defaults(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf8")
    cfg = Config(str(path))
    assert cfg.data == DEFAULTS
    assert "unreadable" in caplog.text


def test_config_bad_value_keeps_default(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default_k": "many", "extra": 1}), encoding="utf8")
    assert Config(str(path)).get("default_k") == 5


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"suggest_time": 1.5}), json.dumps([1, 2]),
     json.dumps({"suggest_time": {"sum": 1.0}})],
)
def test_metrics_bad_file_starts_empty(tmp_path, caplog, content):
    path = tmp_path / "m.json"
    path.write_text(content, encoding="utf8")
    m = Metrics(str(path))
    assert m.summary() == {}
    assert m.count("suggest_time") == 0
    assert "unreadable" in caplog.text
    m.record("suggest_time", 0.5)
    assert m.avg("suggest_time") == pytest.approx(0.5)


def test_metrics_avg_and_save(tmp_path):
    m = Metrics(str(tmp_path / "m.json"))
    m.record("suggest_time", 0.2)
    m.record("suggest_time", 0.4)
    assert m.avg("suggest_time") == pytest.approx(0.3)
    assert m.avg("missing") == 0.0
    m.save()
    again = Metrics(str(tmp_path / "m.json"))
    assert again.count("suggest_time") == 2


def test_log_writes_lines(tmp_path):
    path = tmp_path / "logs" / "app.log"
    log = Log(str(path))
    log.info("hello")
    with log.time_block("work") as t:
        pass
    lines = path.read_text(encoding="utf8").splitlines()
    assert len(lines) == 2
    assert "INFO" in lines[0] and lines[0].endswith("| hello")
    assert "METRIC" in lines[1] and "work done:" in lines[1]
    assert t.elapsed >= 0


def test_log_echo_styles_console(tmp_path):
    console = Console(file=io.StringIO(), force_terminal=True, color_system="standard", width=200)
    log = Log(str(tmp_path / "app.log"), echo=True, console=console)
    log.warning("careful [now]")
    log.debug("quiet")
    out = console.file.getvalue()
    assert "WARNING | careful [now]" in out
    assert "\x1b[33m" in out  # yellow
    assert "DEBUG   | quiet" in out
    assert len((tmp_path / "app.log").read_text(encoding="utf8").splitlines()) == 2


def test_log_no_echo_by_default(tmp_path):
    console = Console(file=io.StringIO(), width=200)
    Log(str(tmp_path / "app.log"), console=console).info("hidden")
    assert console.file.getvalue() == ""


def test_rwlock_readers_share():
    lock = ReadWriteLock()
    inside = threading.Barrier(3, timeout=5)

    def reader():
        with lock.reading():
            inside.wait()  # all three readers must hold the lock at once

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert not inside.broken


def test_rwlock_writer_excludes_readers():
    lock = ReadWriteLock()
    events = []

    lock.acquire_write()

    def reader():
        with lock.reading():
            events.append("read")

    t = threading.Thread(target=reader)
    t.start()
    time.sleep(0.05)
    events.append("write-done")
    lock.release_write()
    t.join(timeout=5)
    assert events == ["write-done", "read"]
