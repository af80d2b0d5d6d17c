import curses
import logging
import os
import sys

import config_paths
from _version import __version__
from record_source import RecordSource

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator

logger = logging.getLogger(__name__)

USAGE = (
    "gridpeek - terminal table viewer\n\n"
    "Usage:\n  gridpeek <csv-parquet-xlsx-h5>\n  gridpeek -v\n  gridpeek -h\n"
)


def open_source(path: str) -> RecordSource:
    return RecordSource(path).load()


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args or "--help" in args:
        print(USAGE)
        return 0

    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    config = config_paths.load_config()
    config_paths.configure_logging(config.get("LOG_LEVEL"))

    path = args[0]
    try:
        source = open_source(path)
    except (ValueError, RuntimeError, OSError) as exc:
        logger.error("Load failed for %s: %s", path, exc)
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1

    def curses_main(stdscr):
        Orchestrator(stdscr, source, config).run()

    curses.wrapper(curses_main)
    return 0


if __name__ == "__main__":
    sys.exit(main())
