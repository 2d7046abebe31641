"""
cometlookup.config — Outbound HTTP client settings.

A single :class:`ClientConfig` is built at start-up (from the environment
and CLI flags) and shared read-only by every request of the run.

Environment variables
---------------------
``AERITH_VERIFY``
    ``false``/``0`` disables TLS verification, ``true``/``1`` enables it,
    anything else is taken as a path to a CA bundle.
``AERITH_CA_BUNDLE``
    CA bundle path, used only when ``AERITH_VERIFY`` is unset.
``COMETLOOKUP_TIMEOUT``, ``COMETLOOKUP_HORIZONS_TIMEOUT``
    Per-request timeouts in seconds for catalog/SBDB and Horizons calls.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Union

#: Comet catalog root on aerith.net.
CATALOG_BASE = "https://www.aerith.net/comet/catalog/"
#: JPL Horizons API endpoint.
HORIZONS_URL = "https://ssd.jpl.nasa.gov/api/horizons.api"
#: JPL Small-Body Database API endpoint.
SBDB_URL = "https://ssd-api.jpl.nasa.gov/sbdb.api"

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; cometlookup/0.1.0)"

Verify = Union[bool, str]


def parse_verify(value: Optional[str], ca_bundle: Optional[str] = None) -> Verify:
    """Translate an ``AERITH_VERIFY``-style string into a ``requests`` verify value."""
    if value is not None and value.strip() != "":
        lowered = value.strip().lower()
        if lowered in ("false", "0"):
            return False
        if lowered in ("true", "1"):
            return True
        return value.strip()
    if ca_bundle:
        return ca_bundle
    return True


def _float_env(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number of seconds, got {raw!r}") from None


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings for every outbound request.

    Attributes
    ----------
    verify : bool or str
        TLS verification: enabled, disabled, or a CA bundle path.
    catalog_timeout : float
        Timeout for catalog page and SBDB probes (seconds).
    horizons_timeout : float
        Timeout for Horizons ephemeris queries (seconds).
    """
    verify: Verify = True
    catalog_timeout: float = 10.0
    sbdb_timeout: float = 10.0
    horizons_timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    catalog_base: str = CATALOG_BASE
    horizons_url: str = HORIZONS_URL
    sbdb_url: str = SBDB_URL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        env = os.environ if env is None else env
        short = _float_env(env, "COMETLOOKUP_TIMEOUT", cls.catalog_timeout)
        return cls(
            verify=parse_verify(env.get("AERITH_VERIFY"), env.get("AERITH_CA_BUNDLE")),
            catalog_timeout=short,
            sbdb_timeout=short,
            horizons_timeout=_float_env(env, "COMETLOOKUP_HORIZONS_TIMEOUT",
                                        cls.horizons_timeout),
        )

    def with_overrides(self, verify: Optional[Verify] = None,
                       timeout: Optional[float] = None) -> "ClientConfig":
        """Return a copy with CLI-level overrides applied."""
        cfg = self
        if verify is not None:
            cfg = replace(cfg, verify=verify)
        if timeout is not None:
            cfg = replace(cfg, catalog_timeout=timeout, sbdb_timeout=timeout)
        return cfg
