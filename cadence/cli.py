import functools
import logging
import os
import sys
from pathlib import Path

import fncli

from .core.errors import CadenceError


def _setup_logging() -> None:
    level = os.environ.get("CADENCE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@functools.cache
def _discover() -> None:
    from . import commands  # noqa: F401

    fncli.autodiscover(Path(__file__).parent, "cadence")


def run(args: list[str]) -> int:
    _discover()
    try:
        return fncli.dispatch(["cadence", *args])
    except CadenceError as e:
        sys.stderr.write(f"{e}\n")
        return 1


def main():
    _setup_logging()
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
