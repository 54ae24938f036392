"""Check subcommand: exit status reflects whether TLS can be served.

Exit codes: ``0`` healthy (or TLS disabled), ``2`` problems found.
"""

from __future__ import annotations

import sys

from sslstatus.tls.status import load_ssl_from

EXIT_UNHEALTHY = 2


def run_check(config, args) -> None:  # noqa: ARG001
    """Print problems to stderr and exit with the matching code."""
    status = load_ssl_from(config.settings)
    problems = status.problems()
    for problem in problems:
        sys.stderr.write(f"{problem}\n")
    sys.exit(EXIT_UNHEALTHY if problems else 0)
