"""
cli.py - interactive autocomplete prompt
Features:
- Type a prefix, optionally followed by K, get the K most popular completions
- Slash commands to record queries, seed exact scores and inspect stats
- Per-query latency tracking (Metrics) and a timestamped log file (Log)
- Uses Rich for prompts, tables and formatting
"""

import argparse
import sys
import time
from typing import List, Optional, TextIO, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from query_autocomplete import __version__
from query_autocomplete.core.autocompleter import AutoCompleter
from query_autocomplete.core.corpus import DEFAULT_CORPUS
from query_autocomplete.core.ranker import Suggestion
from query_autocomplete.utils.config_manager import Config
from query_autocomplete.utils.logger_utils import Log
from query_autocomplete.utils.metrics_tracker import Metrics

BANNER = "Autocomplete demo"
EXIT_WORDS = ("exit", "/q", "/quit", "/exit")
RESTART_KEYS = ("seed_default_corpus",)


class QueryParseError(ValueError):
    """Raised for input lines that can't be turned into (prefix, k)."""


def parse_query(line: str, default_k: int) -> Tuple[str, int]:
    """
    Split "<prefix> [k]" into (prefix, k).
    A trailing integer token is K; everything before it is the prefix,
    rejoined with single spaces so multi-word prefixes work.
    Without a trailing integer the whole line is the prefix and K = default_k.
    """
    tokens = line.split()
    if not tokens:
        raise QueryParseError("Please enter a prefix.")

    k = default_k
    if len(tokens) > 1:
        try:
            k = int(tokens[-1])
        except ValueError:
            k = default_k
        else:
            tokens = tokens[:-1]

    if k < 0:
        raise QueryParseError(f"k must be >= 0, got {k}")
    return " ".join(tokens), k


class CLI:
    """Prompt loop around an AutoCompleter."""

    def __init__(
        self,
        ac: AutoCompleter,
        cfg: Optional[Config] = None,
        metrics: Optional[Metrics] = None,
        log: Optional[Log] = None,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
    ):
        self.ac = ac
        self.cfg = cfg or Config()
        self.metrics = metrics or Metrics()
        self.log = log or Log(self.cfg.get("log_path"))
        self.console = console or Console()
        self.stream = stream
        self.running = True

    def run(self):
        """
        Main loop: read a line, dispatch commands, otherwise answer it as a query.
        Stops on exit words, EOF or Ctrl-C.
        """
        self.console.rule(f"[bold magenta]{BANNER}[/bold magenta]")
        self.console.print(
            '[cyan]Type prefix and k (e.g. "how 5") or type \'exit\' to quit. /help for commands.[/cyan]'
        )
        while self.running:
            try:
                line = self._read_line()
            except (EOFError, KeyboardInterrupt):
                break
            self.handle_line(line)
        self._exit()

    def _read_line(self) -> str:
        if self.stream is None:
            return Prompt.ask(
                "\n[green]Prefix[/green]", console=self.console, default="", show_default=False
            )
        self.console.print("\nPrefix> ", end="")
        raw = self.stream.readline()
        if raw == "":
            raise EOFError
        return raw.strip()

    def handle_line(self, line: str):
        line = line.strip()
        if line in EXIT_WORDS:
            self.running = False
            return
        if line.startswith("/"):
            self._handle_command(line)
            return
        self._process_query(line)

    # COMMAND HANDLING -----------------------------------------------------------
    def _handle_command(self, cmd: str):
        name, _, rest = cmd.partition(" ")
        rest = rest.strip()
        self.log.debug(f"command {name}")

        if name == "/help":
            self._show_help()
        elif name == "/add":
            self._add(rest)
        elif name == "/set":
            self._set(rest)
        elif name == "/train":
            self.train_file(rest)
        elif name == "/stats":
            self._show_stats()
        elif name == "/config":
            self._config(rest)
        else:
            self.log.warning(f"unknown command {cmd!r}")
            self.console.print(f"[red]Unknown command:[/red] {escape(cmd)}")

    def _show_help(self):
        table = Table(title="Commands", box=box.SIMPLE, show_edge=False)
        table.add_column("Input", style="cyan")
        table.add_column("Effect")
        table.add_row("<prefix> [k]", "top k completions (k defaults to %d)" % self.ac.default_k)
        table.add_row("/add <phrase>", "record one search for phrase")
        table.add_row("/set <score> <phrase>", "store phrase with an exact score")
        table.add_row("/train <file>", "record every line of a text file")
        table.add_row("/stats", "index size and query timings")
        table.add_row("/config [key value]", "show or change settings")
        table.add_row("", "(seed_default_corpus applies on next start)")
        table.add_row("exit, /quit", "leave")
        self.console.print(table)

    def _add(self, phrase: str):
        if not phrase:
            self.console.print("[red]usage:[/red] /add <phrase>")
            return
        score = self.ac.record(phrase)
        self.log.info(f"recorded {phrase!r} -> {score}")
        self.console.print(f"[green]Recorded[/green] [{score}] {escape(phrase)}", highlight=False)

    def _set(self, rest: str):
        score_txt, _, phrase = rest.partition(" ")
        phrase = phrase.strip()
        try:
            score = int(score_txt)
        except ValueError:
            score = None
        if score is None or not phrase:
            self.console.print("[red]usage:[/red] /set <score> <phrase>")
            return
        self.ac.set_score(phrase, score)
        self.log.info(f"set {phrase!r} = {score}")
        self.console.print(f"[green]Stored[/green] [{score}] {escape(phrase)}", highlight=False)

    def train_file(self, path: str) -> Optional[int]:
        """Record each non-blank line of `path`. Returns lines recorded, None on error."""
        if not path:
            self.console.print("[red]usage:[/red] /train <file>")
            return None
        try:
            with open(path, "r", encoding="utf8") as f:
                t0 = time.perf_counter()
                n = self.ac.train_lines(f)
                dt = time.perf_counter() - t0
        except OSError as e:
            self.log.error(f"train {path}: {e}")
            self.console.print(f"[red]Training failed:[/red] {escape(str(e))}")
            return None
        self.metrics.record("train_time", dt)
        self.log.metric(f"trained {n} lines from {path}", round(dt, 6), "s")
        self.console.print(f"[green]Trained[/green] on {n} lines in {dt:.3f}s")
        return n

    def _show_stats(self):
        stats = self.ac.stats()
        table = Table(title="Stats", box=box.MINIMAL)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Stored phrases", str(stats["phrases"]))
        table.add_row("Trie nodes", str(stats["nodes"]))
        for key, row in self.metrics.summary().items():
            table.add_row(f"{key} (n={row['count']})", f"{row['avg'] * 1000:.3f} ms")
        self.console.print(table)

    def _config(self, rest: str):
        parts = rest.split(None, 1)
        if not parts:
            for k, v in self.cfg.items():
                self.console.print(f"{k:20} = {v}", markup=False, highlight=False)
            return
        if len(parts) != 2:
            self.console.print("[red]usage:[/red] /config [key value]")
            return
        try:
            val = self.cfg.set(parts[0], parts[1])
        except KeyError as e:
            self.log.warning(f"config: {e.args[0]}")
            self.console.print(f"[red]{escape(e.args[0])}[/red]")
            return
        except ValueError as e:
            self.log.warning(f"config {parts[0]}: {e}")
            self.console.print(f"[red]Bad value:[/red] {escape(str(e))}")
            return
        if parts[0] == "default_k":
            self.ac.default_k = val
        elif parts[0] == "log_path":
            self.log.path = val
        elif parts[0] in RESTART_KEYS:
            self.console.print(f"[dim]{parts[0]} takes effect on next start[/dim]")
        self.console.print(f"{parts[0]} = {val}", markup=False, highlight=False)

    # QUERIES ---------------------------------------------------------------
    def _process_query(self, line: str) -> List[Suggestion]:
        try:
            prefix, k = parse_query(line, self.ac.default_k)
        except QueryParseError as e:
            self.log.warning(f"bad query {line!r}: {e}")
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return []

        t0 = time.perf_counter()
        suggestions = self.ac.suggest(prefix, k)
        dt = time.perf_counter() - t0
        self.metrics.record("suggest_time", dt)
        self.log.metric(f"suggest {prefix!r} k={k}", round(dt, 6), "s")

        self._display_suggestions(prefix, suggestions)
        if self.cfg.get("show_timing"):
            self.console.print(f"[dim]({dt * 1000:.2f} ms)[/dim]")
        return suggestions

    def _display_suggestions(self, prefix: str, suggestions: List[Suggestion]):
        if not suggestions:
            self.console.print(
                f'No suggestions found for prefix "{prefix}"', markup=False, highlight=False
            )
            return
        self.console.print(
            f'Top {len(suggestions)} suggestions for prefix "{prefix}":',
            markup=False,
            highlight=False,
        )
        for s in suggestions:
            self.console.print(f"  {s}", markup=False, highlight=False)

    # EXIT -------------------------------------------------------------------
    def _exit(self):
        self.running = False
        self.metrics.save()
        self.console.print("Goodbye.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="query-autocomplete",
        description="Popularity-ranked prefix autocompletion.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-k", "--k", type=int, default=None, help="default number of suggestions")
    p.add_argument("--no-seed", action="store_true", help="start with an empty index")
    p.add_argument("--train", metavar="FILE", help="record every line of FILE as a search")
    p.add_argument("--config", metavar="FILE", help="JSON settings file")
    p.add_argument("--log-file", metavar="FILE", help="override the log file path")
    p.add_argument("--metrics", metavar="FILE", help="persist timing metrics to FILE")
    p.add_argument("-v", "--verbose", action="store_true", help="echo log lines to the console")
    p.add_argument("--query", "-q", metavar="TEXT", help='answer one query ("prefix [k]") and exit')
    return p


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None,
         stream: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    cfg = Config(args.config)
    if args.k is not None:
        if args.k < 0:
            console.print(f"[red]k must be >= 0, got {args.k}[/red]")
            return 2
        cfg.data["default_k"] = args.k
    log = Log(args.log_file or cfg.get("log_path"), echo=args.verbose, console=console)

    seed = None
    if cfg.get("seed_default_corpus") and not args.no_seed:
        seed = DEFAULT_CORPUS
    with log.time_block("startup seed"):
        ac = AutoCompleter(seed=seed, default_k=cfg.get("default_k"))
    log.info(f"index ready: {len(ac)} phrases")

    cli = CLI(ac, cfg=cfg, metrics=Metrics(args.metrics), log=log, console=console, stream=stream)
    if args.train and cli.train_file(args.train) is None:
        return 1

    if args.query is not None:
        cli.handle_line(args.query)
        cli.metrics.save()
        return 0

    cli.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
