"""Allow ``python -m ubx_logger`` to launch the track logger."""

from __future__ import annotations

import sys


def main() -> None:
    from ubx_logger import run
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
