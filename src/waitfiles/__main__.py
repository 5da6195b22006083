"""Entry point for running waitfiles.

Usage:
    waitfiles build/a.o build/b.o && link ...
    python -m waitfiles out/ready.flag
"""

import os
import sys

from waitfiles.logging import get_logger

log = get_logger()


def main() -> int:
    """Main entry point for the waitfiles CLI."""
    from waitfiles.cli import EXIT_INTERRUPTED, run_cli

    try:
        return run_cli(sys.argv[1:])
    except KeyboardInterrupt:
        # Blocked waiters cannot be interrupted, so skip the interpreter's
        # join of worker threads on the way out.
        log.warning("Interrupted")
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    sys.exit(main())
