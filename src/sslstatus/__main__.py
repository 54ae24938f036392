"""Allow ``python -m sslstatus``."""

from sslstatus.cli.main import main

main()
