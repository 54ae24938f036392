"""Tests for building the SSL status record from settings."""

from __future__ import annotations

import json
import logging
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from sslstatus.config.settings import build_settings
from sslstatus.core.types import ConfigMethod
from sslstatus.logging.setup import StructuredFormatter
from sslstatus.tls.status import SSLStatus, get_ssl_status, load_ssl_from

_TLS_PREFS = {
    "ssl_min_version": "tlsv1.2",
    "ssl_max_version": "TLSv1.3",
    "ssl_curve_preferences": ["x25519", "P384"],
    "ssl_cipher_suites": ["TLS_AES_128_GCM_SHA256", " ECDHE-RSA-AES128-GCM-SHA256 "],
}

_ACME = {
    "enabled": True,
    "url": "https://acme.example.com/directory",
    "email": "ops@example.com",
    "directory": "/var/lib/acme",
    "ca_root": "/etc/ssl/acme-root.pem",
    "accept_tos": True,
}


def _load(server: dict, acme: dict | None = None) -> SSLStatus:
    data: dict = {"server": server}
    if acme is not None:
        data["acme"] = acme
    return load_ssl_from(build_settings(data))


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_default_record(self):
        status = SSLStatus()
        assert status.enabled is False
        assert status.config_method == ConfigMethod.DISABLED
        assert status.protocol == ""

    def test_current_status_before_load(self):
        assert get_ssl_status() == SSLStatus()

    def test_record_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            SSLStatus().enabled = True  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Configuration method resolution
# ---------------------------------------------------------------------------


class TestNonHttps:
    @pytest.mark.parametrize("protocol", ["http", "fcgi", "fcgi+unix", "http+unix"])
    def test_disabled(self, protocol):
        status = _load({"protocol": protocol})
        assert status.enabled is False
        assert status.protocol == protocol
        assert status.config_method == ConfigMethod.DISABLED

    def test_nothing_else_populated(self, cert_pair):
        cert, key = cert_pair
        status = _load(
            {"protocol": "http", "cert_file": str(cert), "key_file": str(key), **_TLS_PREFS},
            _ACME,
        )
        assert status.cert_file == ""
        assert status.key_file == ""
        assert status.cert_file_exists is False
        assert status.acme_enabled is False
        assert status.acme_url == ""
        assert status.minimum_version == ""
        assert status.curve_preferences == ()
        assert status.cipher_suites == ()


class TestHttpsAcme:
    def test_acme_method(self):
        status = _load({"protocol": "https"}, _ACME)
        assert status.enabled is True
        assert status.config_method == ConfigMethod.ACME
        assert status.acme_enabled is True
        assert status.acme_url == _ACME["url"]
        assert status.acme_email == _ACME["email"]
        assert status.acme_directory == _ACME["directory"]
        assert status.acme_ca_root == _ACME["ca_root"]
        assert status.acme_tos is True

    def test_acme_wins_over_cert_key(self, cert_pair):
        cert, key = cert_pair
        status = _load(
            {"protocol": "https", "cert_file": str(cert), "key_file": str(key)},
            _ACME,
        )
        assert status.config_method == ConfigMethod.ACME
        assert status.cert_file == ""
        assert status.cert_file_exists is False

    def test_acme_directory_default(self):
        status = _load({"protocol": "https"}, {"enabled": True, "accept_tos": True})
        assert status.acme_directory == "https"

    def test_tls_prefs_copied(self):
        status = _load({"protocol": "https", **_TLS_PREFS}, _ACME)
        assert status.minimum_version == "TLSv1.2"
        assert status.maximum_version == "TLSv1.3"


class TestHttpsCertKey:
    def test_cert_key_method(self, cert_pair):
        cert, key = cert_pair
        status = _load({"protocol": "https", "cert_file": str(cert), "key_file": str(key)})
        assert status.enabled is True
        assert status.config_method == ConfigMethod.CERT_KEY
        assert status.cert_file == str(cert)
        assert status.key_file == str(key)
        assert status.cert_file_exists is True
        assert status.cert_file_readable is True
        assert status.key_file_exists is True
        assert status.key_file_readable is True
        assert status.acme_enabled is False

    def test_missing_files_still_cert_key(self, tmp_path: Path):
        status = _load(
            {
                "protocol": "https",
                "cert_file": str(tmp_path / "cert.pem"),
                "key_file": str(tmp_path / "key.pem"),
            },
        )
        assert status.config_method == ConfigMethod.CERT_KEY
        assert status.cert_file_exists is False
        assert status.cert_file_readable is False
        assert status.key_file_exists is False
        assert status.key_file_readable is False

    def test_tls_prefs_copied(self, cert_pair):
        cert, key = cert_pair
        status = _load(
            {"protocol": "https", "cert_file": str(cert), "key_file": str(key), **_TLS_PREFS},
        )
        assert status.minimum_version == "TLSv1.2"
        assert status.maximum_version == "TLSv1.3"
        assert status.curve_preferences == ("X25519", "P384")
        assert status.cipher_suites == (
            "TLS_AES_128_GCM_SHA256",
            "ECDHE-RSA-AES128-GCM-SHA256",
        )


class TestHttpsMisconfigured:
    def test_no_acme_no_paths(self):
        status = _load({"protocol": "https"})
        assert status.enabled is True
        assert status.config_method == ConfigMethod.MISCONFIGURED

    @pytest.mark.parametrize("missing", ["cert_file", "key_file"])
    def test_only_one_path(self, cert_pair, missing):
        cert, key = cert_pair
        server = {"protocol": "https", "cert_file": str(cert), "key_file": str(key)}
        server[missing] = ""
        status = _load(server)
        assert status.config_method == ConfigMethod.MISCONFIGURED
        assert status.cert_file == ""
        assert status.key_file == ""

    def test_acme_disabled_is_not_acme(self):
        status = _load({"protocol": "https"}, {**_ACME, "enabled": False})
        assert status.config_method == ConfigMethod.MISCONFIGURED
        assert status.acme_enabled is False
        assert status.acme_url == ""

    def test_tls_prefs_copied(self):
        status = _load({"protocol": "https", **_TLS_PREFS})
        assert status.minimum_version == "TLSv1.2"
        assert status.curve_preferences == ("X25519", "P384")


# ---------------------------------------------------------------------------
# Rebuild semantics
# ---------------------------------------------------------------------------


class TestRebuild:
    def test_load_replaces_current(self, cert_pair):
        cert, key = cert_pair
        first = _load({"protocol": "https", "cert_file": str(cert), "key_file": str(key)})
        assert get_ssl_status() is first

        second = _load({"protocol": "http"})
        assert get_ssl_status() is second
        assert second.cert_file == ""
        assert second.config_method == ConfigMethod.DISABLED

    def test_probe_reflects_disk_at_load_time(self, cert_pair):
        cert, key = cert_pair
        server = {"protocol": "https", "cert_file": str(cert), "key_file": str(key)}
        assert _load(server).cert_file_exists is True

        cert.unlink()
        assert _load(server).cert_file_exists is False


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestProblems:
    def test_disabled_is_healthy(self):
        status = _load({"protocol": "http"})
        assert status.is_healthy is True
        assert status.problems() == []

    def test_acme_is_healthy(self):
        assert _load({"protocol": "https"}, _ACME).is_healthy is True

    def test_misconfigured(self):
        status = _load({"protocol": "https"})
        assert status.is_healthy is False
        assert len(status.problems()) == 1

    def test_missing_cert(self, cert_pair, tmp_path: Path):
        _, key = cert_pair
        missing = tmp_path / "gone.pem"
        status = _load({"protocol": "https", "cert_file": str(missing), "key_file": str(key)})
        assert status.is_healthy is False
        assert status.problems() == [f"certificate file does not exist: {missing}"]

    def test_unreadable_key(self, cert_pair):
        cert, key = cert_pair
        status = SSLStatus(
            enabled=True,
            protocol="https",
            config_method=ConfigMethod.CERT_KEY,
            cert_file=str(cert),
            key_file=str(key),
            cert_file_exists=True,
            cert_file_readable=True,
            key_file_exists=True,
            key_file_readable=False,
        )
        assert status.problems() == [f"key file is not readable: {key}"]

    def test_problems_logged(self, tmp_path: Path, caplog):
        with caplog.at_level(logging.WARNING, logger="sslstatus.tls.status"):
            _load({"protocol": "https"})
        assert any("SSL problem" in r.message for r in caplog.records)

    def test_log_records_carry_method(self, caplog):
        with caplog.at_level(logging.INFO, logger="sslstatus.tls.status"):
            _load({"protocol": "https"})
        loaded = next(r for r in caplog.records if "SSL status loaded" in r.message)
        assert loaded.config_method == "misconfigured"
        assert loaded.ssl_protocol == "https"

        data = json.loads(StructuredFormatter().format(loaded))
        assert data["config_method"] == "misconfigured"


class TestToDict:
    def test_json_friendly(self):
        status = _load({"protocol": "https", **_TLS_PREFS}, _ACME)
        data = status.to_dict()
        assert data["config_method"] == "acme"
        assert type(data["config_method"]) is str
        assert data["curve_preferences"] == ["X25519", "P384"]
        assert isinstance(data["cipher_suites"], list)
        assert data["acme_email"] == _ACME["email"]
        assert set(data) == {f.name for f in SSLStatus.__dataclass_fields__.values()}
