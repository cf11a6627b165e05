import logging

import requests

from password_security.breach import (BreachChecker, BreachResult, find_suffix,
                                      parse_range_response, split_digest)
from password_security.cache import RangeEntry
from password_security.errors import BreachError, HashUnavailableError
from password_security.hashing import PureSha1Backend

from .conftest import PASSWORD_PREFIX, PASSWORD_SUFFIX, RANGE_BODY, make_response


def test_parse_range_response():
    entries = parse_range_response(RANGE_BODY + "\n\ngarbage\nABC:notanumber\nDEF:-1\n")
    assert len(entries) == 4
    assert entries[2] == RangeEntry(PASSWORD_SUFFIX, 10434004)


def test_split_digest():
    digest = PureSha1Backend().digest("password")
    prefix, suffix = split_digest(digest)
    assert (prefix, suffix) == (PASSWORD_PREFIX, PASSWORD_SUFFIX)
    assert prefix + suffix == digest


def test_padding_entries_never_match():
    entries = [RangeEntry("A" * 35, 0)]
    assert find_suffix(entries, "A" * 35) == BreachResult(False, 0)


def test_breached_password(backend, cache, session):
    checker = BreachChecker(backend, cache=cache, session=session)
    result = checker.check("password")
    assert result == BreachResult(True, 10434004)
    assert result.error is None


def test_only_prefix_is_sent(backend, session):
    # SHA-1("hunter2-Secret") = B00D7 6A5523F91C7F552732F6E65AE889870199F
    secret, suffix = "hunter2-Secret", "6A5523F91C7F552732F6E65AE889870199F"
    checker = BreachChecker(backend, session=session, api_url="https://corpus.example/range")
    checker.check(secret)
    args, kwargs = session.get.call_args
    assert args == ("https://corpus.example/range/B00D7",)
    assert "params" not in kwargs and "data" not in kwargs and "json" not in kwargs
    sent = repr((args, kwargs))
    for leaked in (secret, secret.lower(), suffix, suffix.lower()):
        assert leaked not in sent
    assert kwargs["timeout"] == 5.0
    assert kwargs["headers"]["Add-Padding"] == "true"


def test_other_2xx_is_success(backend, session):
    session.get.return_value = make_response(204, "")
    assert BreachChecker(backend, session=session).check("password") == BreachResult(False, 0)


def test_not_found_is_api_error(backend, session):
    session.get.return_value = make_response(404, "")
    assert BreachChecker(backend, session=session).check("password").error is BreachError.API_ERROR


def test_not_breached(backend, session):
    session.get.return_value = make_response(200, "003D68EB55068C33ACE09247EE4C639306B:3\n")
    checker = BreachChecker(backend, session=session)
    assert checker.check("password") == BreachResult(False, 0)


def test_short_password_skips_hashing(session):
    backend = PureSha1Backend()
    checker = BreachChecker(backend, session=session)
    assert checker.check("abc") == BreachResult(False, 0)
    assert checker.check("") == BreachResult(False, 0)
    session.get.assert_not_called()


def test_cache_hit_skips_network(backend, cache, session):
    checker = BreachChecker(backend, cache=cache, session=session)
    checker.check("password")
    checker.check("password")
    assert session.get.call_count == 1
    assert PASSWORD_PREFIX in cache


def test_expired_cache_refetches_and_replaces(backend, cache, clock, session):
    checker = BreachChecker(backend, cache=cache, session=session)
    checker.check("password")
    clock.advance(3601)
    session.get.return_value = make_response(200, f"{PASSWORD_SUFFIX}:42\n")
    assert checker.check("password") == BreachResult(True, 42)
    assert session.get.call_count == 2
    assert cache.get(PASSWORD_PREFIX) == (RangeEntry(PASSWORD_SUFFIX, 42),)


def test_timeout_fails_open(backend, cache, session):
    session.get.side_effect = requests.exceptions.ReadTimeout("slow")
    checker = BreachChecker(backend, cache=cache, session=session)
    assert checker.check("password") == BreachResult(False, 0, BreachError.TIMEOUT)
    assert len(cache) == 0


def test_connect_timeout_is_timeout(backend, session):
    session.get.side_effect = requests.exceptions.ConnectTimeout("slow")
    assert BreachChecker(backend, session=session).check("password").error is BreachError.TIMEOUT


def test_api_error_fails_open(backend, cache, session):
    session.get.return_value = make_response(503, "")
    checker = BreachChecker(backend, cache=cache, session=session)
    assert checker.check("password") == BreachResult(False, 0, BreachError.API_ERROR)
    assert len(cache) == 0


def test_network_failure_is_api_error(backend, session):
    session.get.side_effect = requests.exceptions.ConnectionError("down")
    assert BreachChecker(backend, session=session).check("password").error is BreachError.API_ERROR


def test_missing_backend(session):
    checker = BreachChecker(None, session=session)
    assert checker.check("password") == BreachResult(False, 0, BreachError.HASH_UNAVAILABLE)
    session.get.assert_not_called()


def test_backend_failure(session):
    class Broken(PureSha1Backend):
        def digest(self, password):
            raise HashUnavailableError("refused")

    checker = BreachChecker(Broken(), session=session)
    assert checker.check("password").error is BreachError.HASH_UNAVAILABLE


def test_unexpected_error_is_check_failed(backend, session):
    session.get.side_effect = RuntimeError("boom")
    result = BreachChecker(backend, session=session).check("password")
    assert result == BreachResult(False, 0, BreachError.CHECK_FAILED)


def test_password_never_logged(backend, session, caplog):
    caplog.set_level(logging.DEBUG, logger="password_security")
    BreachChecker(backend, session=session).check("password")
    session.get.side_effect = requests.exceptions.ReadTimeout("slow")
    BreachChecker(backend, session=session).check("password")
    text = caplog.text
    assert "password" not in text.replace("password_security", "")
    assert PASSWORD_SUFFIX not in text


def test_to_dict():
    assert BreachResult(False, 0, BreachError.TIMEOUT).to_dict() == {
        "is_breached": False, "count": 0, "error": "TIMEOUT"}
    assert BreachResult(True, 3).to_dict() == {"is_breached": True, "count": 3}
