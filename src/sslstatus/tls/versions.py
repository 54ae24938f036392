"""TLS protocol version, curve, and cipher-suite name handling.

Names are accepted case-insensitively as they appear in the ``[server]``
section (``tlsv1.2``, ``TLSv1.2``) and canonicalized to a single spelling
so the status record always reports the same string for the same setting.
"""

from __future__ import annotations

import ssl

_VERSIONS: dict[str, tuple[str, ssl.TLSVersion]] = {
    "tlsv1.0": ("TLSv1.0", ssl.TLSVersion.TLSv1),
    "tlsv1.1": ("TLSv1.1", ssl.TLSVersion.TLSv1_1),
    "tlsv1.2": ("TLSv1.2", ssl.TLSVersion.TLSv1_2),
    "tlsv1.3": ("TLSv1.3", ssl.TLSVersion.TLSv1_3),
}

_CURVES: dict[str, str] = {
    "x25519": "X25519",
    "p256": "P256",
    "p384": "P384",
    "p521": "P521",
}

KNOWN_VERSIONS = tuple(name for name, _ in _VERSIONS.values())
KNOWN_CURVES = tuple(_CURVES.values())


def parse_tls_version(value: str) -> str:
    """Return the canonical spelling of a TLS version name.

    An empty (or whitespace-only) value means "use the library default"
    and is returned as ``""``.

    Raises :class:`ValueError` for unknown names.
    """
    key = value.strip().lower()
    if not key:
        return ""
    try:
        return _VERSIONS[key][0]
    except KeyError:
        msg = f"unknown TLS version '{value}' (expected one of {', '.join(KNOWN_VERSIONS)})"
        raise ValueError(msg) from None


def to_ssl_version(value: str) -> ssl.TLSVersion | None:
    """Map a version name to :class:`ssl.TLSVersion`, ``None`` when empty."""
    canonical = parse_tls_version(value)
    if not canonical:
        return None
    return _VERSIONS[canonical.lower()][1]


def version_order(minimum: str, maximum: str) -> bool:
    """Return ``True`` when *minimum* <= *maximum*.

    Either side being empty means "unbounded" and always satisfies the
    ordering.
    """
    low = to_ssl_version(minimum)
    high = to_ssl_version(maximum)
    if low is None or high is None:
        return True
    return low <= high


def parse_curve(value: str) -> str:
    """Return the canonical spelling of an elliptic curve name."""
    key = value.strip().lower().replace("-", "")
    try:
        return _CURVES[key]
    except KeyError:
        msg = f"unknown curve '{value}' (expected one of {', '.join(KNOWN_CURVES)})"
        raise ValueError(msg) from None


def parse_cipher_suites(values: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Strip cipher-suite names and drop blanks; names are not validated."""
    return tuple(v.strip() for v in values if v and v.strip())
