from datetime import datetime, timedelta, timezone

import pytest

from gptkit.ratelimit import RateLimitHeaders, ResetTime, parse_duration


def test_from_headers_reads_values():
    headers = {
        "x-ratelimit-limit-requests": "60",
        "X-RateLimit-Limit-Tokens": "150000",
        "x-ratelimit-remaining-requests": "59",
        "x-ratelimit-remaining-tokens": "149984",
        "x-ratelimit-reset-requests": "1s",
        "x-ratelimit-reset-tokens": "6m0s",
    }
    limits = RateLimitHeaders.from_headers(headers)
    assert limits.limit_requests == 60
    assert limits.limit_tokens == 150000
    assert limits.remaining_requests == 59
    assert limits.remaining_tokens == 149984
    assert str(limits.reset_requests) == "1s"
    assert limits.reset_tokens == "6m0s"


def test_from_headers_bad_and_missing_values():
    limits = RateLimitHeaders.from_headers({"x-ratelimit-limit-requests": "lots"})
    assert limits == RateLimitHeaders()
    assert limits.limit_requests == 0


def test_from_headers_takes_first_of_list():
    limits = RateLimitHeaders.from_headers({"x-ratelimit-limit-tokens": ["7", "8"]})
    assert limits.limit_tokens == 7


@pytest.mark.parametrize(
    ("left", "right"),
    [("1m30s", "90s"), ("1h", "60m"), ("1s", "1000ms"), ("1ms", "1000us"), ("2.5s", "2500ms")],
)
def test_equivalent_durations(left, right):
    assert parse_duration(left) == parse_duration(right)


def test_sign_negates():
    assert parse_duration("-1h2m") == -parse_duration("1h2m")
    assert parse_duration("+3s") == parse_duration("3s")


def test_pinned_durations():
    assert parse_duration("1.5h") == timedelta(hours=1, minutes=30)
    assert parse_duration("0") == timedelta(0)


@pytest.mark.parametrize("text", ["", "-", "5", "1x", "s", ".s", "1.2.3s", "3000000h"])
def test_invalid_durations(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_reset_time_adds_duration():
    before = datetime.now(timezone.utc)
    moment = ResetTime("1h").time()
    after = datetime.now(timezone.utc)
    assert before + parse_duration("1h") <= moment <= after + parse_duration("1h")


def test_unparsable_reset_time_is_now():
    before = datetime.now(timezone.utc)
    moment = ResetTime("soon").time()
    assert before <= moment <= datetime.now(timezone.utc)