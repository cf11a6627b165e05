from unittest import mock

import requests

from password_security import PasswordSecurity, PolicyConfig, StrengthLevel
from password_security.cache import RangeCache
from password_security.errors import BreachError

from .conftest import RANGE_BODY, make_response


def make_engine(session, backend=None, cache=None):
    return PasswordSecurity.create(backend=backend, cache=cache, session=session)


def test_create_selects_backend(session):
    engine = make_engine(session)
    assert engine.checker.backend is not None
    assert isinstance(engine.cache, RangeCache)


def test_api_surface(session, backend, cache):
    with make_engine(session, backend, cache) as engine:
        breach = engine.check_breached_password("password")
        assert breach.is_breached and breach.count == 10434004

        assert engine.assess_password_strength("abc").level is StrengthLevel.VERY_WEAK

        result = engine.validate_password_policy("password")
        assert not result.is_valid
        assert any("data breach" in v for v in result.violations)
        assert "Password cannot contain: password" in result.violations

        assert len(engine.generate_secure_password(20)) == 20
    assert len(cache) == 0
    session.close.assert_called_once()


def test_cache_shared_between_calls(session, backend, cache):
    engine = make_engine(session, backend, cache)
    engine.check_breached_password("password")
    engine.validate_password_policy("password")
    assert session.get.call_count == 1


def test_timeout_via_engine(backend):
    session = mock.Mock(spec=requests.Session)
    session.get.side_effect = requests.exceptions.Timeout()
    engine = make_engine(session, backend)
    result = engine.check_breached_password("password")
    assert (result.is_breached, result.error) == (False, BreachError.TIMEOUT)
    policy_result = engine.validate_password_policy("Tr0ub4dor&3", PolicyConfig())
    assert policy_result.is_valid


def test_separate_engines_do_not_share_cache(backend):
    s1 = mock.Mock(spec=requests.Session)
    s1.get.return_value = make_response(200, RANGE_BODY)
    s2 = mock.Mock(spec=requests.Session)
    s2.get.return_value = make_response(200, RANGE_BODY)
    make_engine(s1, backend).check_breached_password("password")
    make_engine(s2, backend).check_breached_password("password")
    assert s1.get.call_count == s2.get.call_count == 1
