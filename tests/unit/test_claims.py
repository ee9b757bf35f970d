"""Claim key and validator tests."""

import pytest

from jwtsmith.claims import RegisteredClaim, Validator, as_validator, claim_key
from jwtsmith.errors import InvalidClaimKey

NOW = 1_700_000_000_000


@pytest.fixture
def frozen_clock(monkeypatch):
    monkeypatch.setattr("jwtsmith.utils.time.current_time", lambda: NOW)


def test_claim_key_accepts_identifiers_and_registered_claims():
    assert claim_key("user_id") == "user_id"
    assert claim_key(RegisteredClaim.EXP) == "exp"


@pytest.mark.parametrize("bad", ["", "user-id", "1st", "has space", 42, None, b"exp"])
def test_claim_key_rejects_non_identifiers(bad):
    with pytest.raises(InvalidClaimKey) as exc_info:
        claim_key(bad)
    assert exc_info.value.key == bad
    assert exc_info.value.code == "INVALID_CLAIM_KEY"


def test_invalid_claim_key_is_a_value_error():
    with pytest.raises(ValueError):
        claim_key("not valid")


def test_time_validators_read_clock_when_called(frozen_clock, monkeypatch):
    after = Validator.after_now()
    before = Validator.before_now()

    assert after(NOW + 1)
    assert not after(NOW)
    assert before(NOW - 1)
    assert not before(NOW)

    monkeypatch.setattr("jwtsmith.utils.time.current_time", lambda: NOW + 10)
    assert not after(NOW + 1)
    assert before(NOW + 1)


def test_time_validators_with_leeway(frozen_clock):
    assert Validator.after_now(leeway=5)(NOW - 4)
    assert Validator.before_now(leeway=5)(NOW + 4)


def test_equals_and_one_of_validators():
    assert Validator.equals("jwtsmith")("jwtsmith")
    assert not Validator.equals("jwtsmith")("other")
    assert "jwtsmith" in Validator.equals("jwtsmith").description

    roles = Validator.one_of(["admin", "user"])
    assert roles("admin")
    assert not roles("guest")


def test_as_validator_wraps_callables():
    def is_positive(value):
        return value > 0

    wrapped = as_validator("count", is_positive)
    assert isinstance(wrapped, Validator)
    assert wrapped(3)
    assert wrapped.description == "rejected by is_positive"

    existing = Validator.equals(1)
    assert as_validator("count", existing) is existing


def test_as_validator_rejects_non_callables():
    with pytest.raises(TypeError):
        as_validator("count", 5)
