"""
cometlookup.transport — Blocking HTTP probes.

:class:`HttpProbe` issues one GET or POST and reports the outcome as a
:class:`ProbeOutcome` instead of raising.  Resolvers decide what a failed
probe means; nothing is retried at this layer.

Any object with the same ``get``/``post`` signatures can stand in for
:class:`HttpProbe`, which is how the resolvers are tested offline.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

import requests

from cometlookup.config import ClientConfig
from cometlookup.errors import NotFoundError, TransportError

logger = logging.getLogger(__name__)

Status = Literal["success", "not_found", "error"]


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of a single request.

    Attributes
    ----------
    status : {"success", "not_found", "error"}
        ``success`` means HTTP 200 with a body, ``not_found`` HTTP 404,
        ``error`` anything else (other status codes, timeouts, TLS).
    url : str
        The requested URL.
    body : str
        Response text (empty unless ``success``).
    status_code : int, optional
        HTTP status, ``None`` when no response arrived.
    headers : dict
        Response headers.
    error : str
        Human-readable reason for an ``error`` outcome.
    """
    status: Status
    url: str
    body: str = field(default="", repr=False)
    status_code: Optional[int] = None
    headers: Mapping[str, str] = field(default_factory=dict, repr=False)
    error: str = ""

    @classmethod
    def success(cls, url: str, body: str, status_code: int = 200,
                headers: Optional[Mapping[str, str]] = None) -> "ProbeOutcome":
        return cls("success", url, body, status_code, dict(headers or {}))

    @classmethod
    def not_found(cls, url: str) -> "ProbeOutcome":
        return cls("not_found", url, status_code=404)

    @classmethod
    def failure(cls, url: str, error: str,
                status_code: Optional[int] = None) -> "ProbeOutcome":
        return cls("error", url, status_code=status_code, error=error)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def raise_for_outcome(self) -> None:
        """Raise :class:`NotFoundError` or :class:`TransportError` unless successful."""
        if self.status == "not_found":
            raise NotFoundError(self.url)
        if self.status == "error":
            raise TransportError(self.error or "request failed", url=self.url,
                                 status_code=self.status_code)


class HttpProbe:
    """``requests``-backed probe sharing one session and one :class:`ClientConfig`.

    Redirects are followed; TLS verification follows ``config.verify``.
    """

    def __init__(self, config: Optional[ClientConfig] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or ClientConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

    def get(self, url: str, params: Optional[Mapping[str, str]] = None,
            timeout: Optional[float] = None) -> ProbeOutcome:
        return self._send("GET", url, params=params, timeout=timeout)

    def post(self, url: str, data: Optional[Mapping[str, str]] = None,
             timeout: Optional[float] = None) -> ProbeOutcome:
        return self._send("POST", url, data=data, timeout=timeout)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpProbe":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _send(self, method: str, url: str, params=None, data=None,
              timeout: Optional[float] = None) -> ProbeOutcome:
        timeout = timeout if timeout is not None else self.config.catalog_timeout
        try:
            resp = self.session.request(
                method, url, params=params, data=data, timeout=timeout,
                verify=self.config.verify, allow_redirects=True,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return ProbeOutcome.failure(url, f"{type(e).__name__}: {e}")

        logger.debug("%s %s -> %s", method, resp.url, resp.status_code)
        if resp.status_code == 404:
            return ProbeOutcome.not_found(url)
        if resp.status_code != 200:
            return ProbeOutcome.failure(url, f"HTTP {resp.status_code} {resp.reason}",
                                        status_code=resp.status_code)
        return ProbeOutcome.success(url, resp.text, resp.status_code, resp.headers)
