from __future__ import annotations

import json

import pytest

from cometlookup.transport import ProbeOutcome

BASE = "https://www.aerith.net/comet/catalog/"


class StubProbe:
    """Offline stand-in for HttpProbe.

    ``pages`` maps URL -> body (str) or a ready ProbeOutcome; unknown URLs
    are 404.  ``horizons`` maps COMMAND -> reply body for POSTs.
    """

    def __init__(self, pages=None, horizons=None, sbdb=None):
        self.pages = dict(pages or {})
        self.horizons = dict(horizons or {})
        self.sbdb = sbdb
        self.calls: list[tuple[str, str]] = []

    def get(self, url, params=None, timeout=None):
        if params and "des" in params:
            self.calls.append(("GET", f"{url}?des={params['des']}"))
            if self.sbdb is None:
                return ProbeOutcome.not_found(url)
            if isinstance(self.sbdb, ProbeOutcome):
                return self.sbdb
            return ProbeOutcome.success(url, self.sbdb)
        self.calls.append(("GET", url))
        found = self.pages.get(url)
        if found is None:
            return ProbeOutcome.not_found(url)
        if isinstance(found, ProbeOutcome):
            return found
        return ProbeOutcome.success(url, found)

    def post(self, url, data=None, timeout=None):
        command = data["COMMAND"]
        self.calls.append(("POST", command))
        found = self.horizons.get(command)
        if found is None:
            return ProbeOutcome.success(url, json.dumps({"result": "No matches found."}))
        if isinstance(found, ProbeOutcome):
            return found
        return ProbeOutcome.success(url, found)

    @property
    def urls(self):
        return [target for method, target in self.calls if method == "GET"]

    @property
    def commands(self):
        return [target for method, target in self.calls if method == "POST"]


@pytest.fixture
def stub_probe():
    return StubProbe
