"""sslstatus configuration loader built on ConfigKit.

Lifecycle::

    # 1. CLI creates the singleton (once, at startup)
    SslStatusConfig(config_file="/etc/sslstatus/config.yaml", schema_file="bundled")

    # 2. Any module retrieves it afterwards
    from sslstatus.config import get_config
    cfg = get_config()
    cfg.settings.server.protocol  # typed access

    # 3. Extension / dynamic access
    cfg.get("acme.email", default="")
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from configkit import ConfigKit, ConfigKitMeta
from jsonschema import Draft202012Validator, ValidationError

from sslstatus.config.settings import SslStatusSettings, build_settings
from sslstatus.tls.versions import parse_curve, parse_tls_version, version_order

_SCHEMA_PATH = Path(__file__).parent / "schema.json"

_ENV_RE = re.compile(
    r"^\$\{([^}:]+?)(?::-(.*))?\}$",
    re.DOTALL,
)

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level singleton reference
# ---------------------------------------------------------------------------
_instance: SslStatusConfig | None = None


def get_config() -> SslStatusConfig:
    """Return the initialised configuration singleton.

    Raises :class:`RuntimeError` if :class:`SslStatusConfig` has not been
    created yet (i.e. the CLI entry point has not run).
    """
    if _instance is None:
        msg = (
            "Configuration not initialised. "
            "SslStatusConfig must be created with config_file= before calling get_config()."
        )
        raise RuntimeError(msg)
    return _instance


# ---------------------------------------------------------------------------
# Validation error collector
# ---------------------------------------------------------------------------


class ConfigValidationError(Exception):
    """Raised when cross-field validation finds one or more problems."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        body = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Configuration validation failed:\n{body}")


# ---------------------------------------------------------------------------
# Environment variable resolution
# ---------------------------------------------------------------------------


def _resolve_value(value: str, path: str) -> str:
    """Replace ``${VAR}`` or ``${VAR:-default}`` with env var value."""
    match = _ENV_RE.match(value)
    if match is None:
        return value
    var_name = match.group(1)
    fallback = match.group(2)
    resolved = os.environ.get(var_name)
    if resolved is not None:
        return resolved
    if fallback is not None:
        return fallback
    raise ConfigValidationError(
        [
            f"Environment variable '${{{var_name}}}' referenced "
            f"at '{path}' is not set and has no default",
        ],
    )


def _resolve_env_vars(
    data: Any,  # noqa: ANN401
    path: str = "",
) -> None:
    """Walk *data* in-place and resolve ``${VAR}``/``${VAR:-default}`` strings."""
    if isinstance(data, dict):
        for key in data:
            child_path = f"{path}.{key}" if path else key
            if isinstance(data[key], str):
                data[key] = _resolve_value(data[key], child_path)
            elif isinstance(data[key], (dict, list)):
                _resolve_env_vars(data[key], child_path)
    elif isinstance(data, list):
        for idx, item in enumerate(data):
            child_path = f"{path}[{idx}]"
            if isinstance(item, str):
                data[idx] = _resolve_value(item, child_path)
            elif isinstance(item, (dict, list)):
                _resolve_env_vars(item, child_path)


# ---------------------------------------------------------------------------
# Config class
# ---------------------------------------------------------------------------


class SslStatusConfig(ConfigKit):
    """Central configuration for sslstatus.

    Subclasses :class:`configkit.ConfigKit`.  The JSON schema is
    bundled at ``config/schema.json``; users supply only ``config_file``.

    After construction the typed settings tree is available at
    :pyattr:`settings` and the raw dict via :pyattr:`data` /
    :pymeth:`get`.
    """

    def __init__(
        self,
        *,
        config_file: str | Path,
        schema_file: str | Path | None = None,  # noqa: ARG002
    ) -> None:
        """Initialise the configuration singleton.

        Parameters
        ----------
        config_file:
            Path to the YAML/JSON configuration file.
        schema_file:
            Ignored.  Exists only to satisfy the
            :class:`ConfigKitMeta` singleton guard.

        """
        global _instance  # noqa: PLW0603

        super().__init__(
            config_file=config_file,
            schema_file=_SCHEMA_PATH,
        )

        self._settings: SslStatusSettings = build_settings(self.data)
        _instance = self

    # -- lifecycle overrides ------------------------------------------------

    def _load(self) -> None:
        """Load config file then resolve ``${VAR}`` env-var references.

        Runs env-var resolution **before** schema validation so that
        substituted values (e.g. ``${PROTOCOL:-https}``) are checked
        against enum constraints in the schema.
        """
        super()._load()
        _resolve_env_vars(self._data)

    # -- typed access -------------------------------------------------------

    @property
    def settings(self) -> SslStatusSettings:
        """Fully-typed, frozen settings tree."""
        return self._settings

    # -- cross-field validation ---------------------------------------------

    def additional_checks(self) -> None:
        """Semantic & cross-field validation.

        Called automatically by ConfigKit **after** schema validation
        passes.
        """
        errors, warnings = validate_data(self.data)

        for w in warnings:
            log.warning("Config warning: %s", w)

        if errors:
            raise ConfigValidationError(errors)

    # -- helpers ------------------------------------------------------------

    def reload_settings(self) -> SslStatusSettings:
        """Re-read the config file and rebuild settings.

        Does not reset the singleton.  Re-reads the file, resolves env
        vars, validates against the bundled schema, re-runs the
        cross-field checks and returns a fresh :class:`SslStatusSettings`
        tree.  Schema failures raise :class:`ValueError` exactly as they
        do at startup.
        """
        source_file = str(self._config_path)
        with open(source_file, encoding="utf-8") as f:  # noqa: PTH123
            if source_file.endswith((".yaml", ".yml")):
                new_data = yaml.safe_load(f)
            else:
                new_data = json.load(f)

        new_data = new_data or {}
        _resolve_env_vars(new_data)
        try:
            Draft202012Validator(self.schema).validate(new_data)
        except ValidationError as exc:
            msg = f"Schema validation failed: {exc.message}"
            raise ValueError(msg) from exc

        errors, _ = validate_data(new_data)
        if errors:
            raise ConfigValidationError(errors)
        return build_settings(new_data)

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton -- testing only."""
        global _instance  # noqa: PLW0603
        _instance = None
        ConfigKitMeta.reset()

    def __repr__(self) -> str:
        return f"<SslStatusConfig config_file={self._config_path}>"


def validate_data(data: dict) -> tuple[list[str], list[str]]:  # noqa: C901, PLR0912
    """Return ``(errors, warnings)`` for raw configuration *data*."""
    errors: list[str] = []
    warnings: list[str] = []

    server = data.get("server") or {}
    acme = data.get("acme") or {}

    protocol = server.get("protocol", "http")
    is_https = protocol == "https"

    # -- TLS versions --
    versions: dict[str, str] = {}
    for key in ("ssl_min_version", "ssl_max_version"):
        raw = server.get(key) or ""
        try:
            versions[key] = parse_tls_version(raw)
        except ValueError as exc:
            errors.append(f"server.{key}: {exc}")
    if len(versions) == 2 and not version_order(  # noqa: PLR2004
        versions["ssl_min_version"],
        versions["ssl_max_version"],
    ):
        errors.append(
            f"server.ssl_min_version ({versions['ssl_min_version']}) must not be "
            f"greater than server.ssl_max_version ({versions['ssl_max_version']})",
        )

    # -- Curves --
    for idx, curve in enumerate(server.get("ssl_curve_preferences", [])):
        try:
            parse_curve(curve)
        except ValueError as exc:
            errors.append(f"server.ssl_curve_preferences[{idx}]: {exc}")

    # -- ACME --
    if acme.get("enabled"):
        if not acme.get("accept_tos"):
            errors.append(
                "acme.accept_tos must be true when acme.enabled is true "
                "(the CA's terms of service have to be accepted)",
            )
        if not is_https:
            warnings.append(
                f"acme.enabled is true but server.protocol is '{protocol}'; "
                "ACME settings are ignored unless protocol is https",
            )

    # -- Certificate paths --
    has_cert_key = bool(server.get("cert_file")) and bool(server.get("key_file"))
    if is_https and not acme.get("enabled") and not has_cert_key:
        warnings.append(
            "server.protocol is https but neither acme.enabled nor both "
            "server.cert_file and server.key_file are set, so TLS is misconfigured",
        )
    if not is_https and (server.get("cert_file") or server.get("key_file")):
        warnings.append(
            f"server.cert_file/server.key_file are set but server.protocol is "
            f"'{protocol}'; certificate paths are ignored",
        )

    # -- Admin --
    admin = data.get("admin") or {}
    base_path = admin.get("base_path", "/admin")
    if admin.get("enabled", True) and base_path.rstrip("/") == "":
        errors.append("admin.base_path must not be '/' (it would shadow /livez and /healthz)")

    return errors, warnings
