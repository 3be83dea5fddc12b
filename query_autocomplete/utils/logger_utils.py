# logger_utils.py -  for logging messages and performance metrics, timestamps etc

import os
import time
from datetime import datetime
from typing import Optional

from rich.console import Console

# Path to the default log file, can be overriden
DEFAULT_LOG_PATH = os.path.join("logs", "autocomplete.log")


class Log:
    """Lightweight file logger for the CLI: messages plus timing metrics."""

    STYLES = {
        "DEBUG": "dim",
        "INFO": "blue",
        "WARNING": "yellow",
        "ERROR": "bold red",
        "METRIC": "magenta",
    }

    def __init__(self, path: Optional[str] = None, echo: bool = False,
                 console: Optional[Console] = None):
        self.path = path or DEFAULT_LOG_PATH
        self.echo = echo
        self.console = console or Console(stderr=True)

    def write(self, level: str, msg: str) -> str:
        """
        Append a log message to the log file with a timestamp.
        Each entry is written as: [YYYY-MM-DD HH:MM:SS] LEVEL   | message
        The log directory is created on first write.
        """
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{ts}] {level:<7} | {msg}"

        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

        if self.echo:
            self.console.print(line, style=self.STYLES.get(level), markup=False,
                               highlight=False)
        return line

    def debug(self, msg: str) -> str:
        return self.write("DEBUG", msg)

    def info(self, msg: str) -> str:
        return self.write("INFO", msg)

    def warning(self, msg: str) -> str:
        return self.write("WARNING", msg)

    def error(self, msg: str) -> str:
        return self.write("ERROR", msg)

    def metric(self, tag: str, value, unit: str = "") -> str:
        """
        Record a metric (timing, counts).
        Example line: [2026-10-19 12:45:02] METRIC  | suggest done: 0.001s
        """
        return self.write("METRIC", f"{tag}: {value}{unit}")

    def time_block(self, label: str) -> "_Timer":
        """
        Measure a code block and log its duration as a metric:
            with log.time_block("seed"):
                ac.seed(pairs)
        """
        return _Timer(self, label)


class _Timer:
    """Context manager used by Log.time_block."""

    def __init__(self, log: Log, label: str):
        self.log = log
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        self.log.metric(f"{self.label} done", round(self.elapsed, 6), "s")
        return False
