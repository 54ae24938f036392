"""Status subcommand: print the SSL/TLS status record.

Usage::

    sslstatus -c config.yaml status
    sslstatus -c config.yaml status --format json
"""

from __future__ import annotations

import json
import sys

from sslstatus.api.serializers import serialize_ssl_status
from sslstatus.tls.status import SSLStatus, load_ssl_from

_LABELS = (
    ("enabled", "Enabled"),
    ("protocol", "Protocol"),
    ("config_method", "Method"),
    ("cert_file", "Certificate"),
    ("cert_file_exists", "  exists"),
    ("cert_file_readable", "  readable"),
    ("key_file", "Key"),
    ("key_file_exists", "  exists"),
    ("key_file_readable", "  readable"),
    ("minimum_version", "Min version"),
    ("maximum_version", "Max version"),
    ("curve_preferences", "Curves"),
    ("cipher_suites", "Cipher suites"),
    ("acme_enabled", "ACME"),
    ("acme_url", "  url"),
    ("acme_email", "  email"),
    ("acme_directory", "  directory"),
    ("acme_ca_root", "  CA root"),
    ("acme_tos", "  TOS accepted"),
)


def run_status(config, args) -> None:
    """Rebuild the SSL status from *config* and print it."""
    status = load_ssl_from(config.settings)
    if getattr(args, "format", "text") == "json":
        sys.stdout.write(json.dumps(serialize_ssl_status(status), indent=2) + "\n")
    else:
        sys.stdout.write(format_status(status))


def format_status(status: SSLStatus) -> str:
    """Render *status* as aligned ``label: value`` lines."""
    data = status.to_dict()
    width = max(len(label) for _, label in _LABELS)
    lines = []
    for key, label in _LABELS:
        value = data[key]
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        elif value == "":
            value = "-"
        elif isinstance(value, bool):
            value = "yes" if value else "no"
        lines.append(f"{label.ljust(width)}  {value}")

    problems = status.problems()
    lines.append("")
    if problems:
        lines.extend(f"PROBLEM: {p}" for p in problems)
    else:
        lines.append("OK")
    return "\n".join(lines) + "\n"
