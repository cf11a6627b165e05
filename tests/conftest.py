from unittest import mock

import pytest
import requests

from password_security.cache import RangeCache
from password_security.hashing import PureSha1Backend

# SHA-1("password") = 5BAA6 1E4C9B93F3F0682250B6CF8331B7EE68FD8
PASSWORD_PREFIX = "5BAA6"
PASSWORD_SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"

RANGE_BODY = "\r\n".join([
    "003D68EB55068C33ACE09247EE4C639306B:3",
    "012C192B2F16F82EA0EB9EF18D9D539B0DD:1",
    f"{PASSWORD_SUFFIX}:10434004",
    "FFFFF0000000000000000000000000000AB:0",
])


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_response(status=200, text=""):
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status
    resp.text = text
    resp.encoding = "utf-8"
    resp.iter_content.return_value = [text.encode("utf-8")] if text else []
    return resp


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    c = RangeCache(ttl=3600, max_entries=10, clock=clock)
    yield c
    c.clear()


@pytest.fixture
def session():
    s = mock.Mock(spec=requests.Session)
    s.get.return_value = make_response(200, RANGE_BODY)
    return s


@pytest.fixture
def backend():
    return PureSha1Backend()
