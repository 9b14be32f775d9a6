import httpx
import pytest

from shopify_catalog_api.errors import (
    ExhaustedRetries,
    RateLimited,
    TransientTransportError,
    UpstreamError,
)
from shopify_catalog_api.retry import call_with_retry, is_rate_limited, rate_limit_delay


class FlakyRequest:
    def __init__(self, failures, result="ok"):
        self.failures = list(failures)
        self.result = result
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return self.result


def test_is_rate_limited_predicate():
    request = httpx.Request("POST", "https://shop.test/graphql.json")
    response = httpx.Response(429, request=request)

    assert is_rate_limited(RateLimited())
    assert is_rate_limited(httpx.HTTPStatusError("too many", request=request, response=response))
    assert is_rate_limited(RuntimeError("429 Too Many Requests"))
    assert is_rate_limited(RuntimeError("query THROTTLED"))
    assert not is_rate_limited(TransientTransportError("Shopify returned 503", status_code=503))
    assert not is_rate_limited(ValueError("boom"))
    assert not is_rate_limited(TransientTransportError("Request to Shopify failed: connect to http://proxy:4290/"))
    assert not is_rate_limited(RuntimeError("product 429 not found"))


def test_rate_limit_delay_is_exponential():
    assert [rate_limit_delay(a) for a in (1, 2, 3)] == [2.0, 4.0, 8.0]
    assert rate_limit_delay(2, base_delay=0.5) == 2.0


@pytest.mark.asyncio
async def test_two_rate_limits_then_success(recording_sleep):
    request = FlakyRequest([RateLimited(), RateLimited()])

    result = await call_with_retry(request, 3, sleep=recording_sleep)

    assert result == "ok"
    assert request.calls == 3
    assert recording_sleep.delays == [2.0, 4.0]


@pytest.mark.asyncio
async def test_transient_error_uses_fixed_backoff(recording_sleep):
    request = FlakyRequest([TransientTransportError("reset"), TransientTransportError("reset")])

    result = await call_with_retry(request, 3, sleep=recording_sleep)

    assert result == "ok"
    assert recording_sleep.delays == [1.0, 1.0]


@pytest.mark.asyncio
async def test_non_rate_limit_error_on_every_attempt_is_reraised(recording_sleep):
    error = RuntimeError("boom")
    request = FlakyRequest([error, error, error, error])

    with pytest.raises(RuntimeError, match="boom"):
        await call_with_retry(request, 3, sleep=recording_sleep)

    assert request.calls == 3
    assert recording_sleep.delays == [1.0, 1.0]


@pytest.mark.asyncio
async def test_rate_limited_every_attempt_exhausts(recording_sleep):
    request = FlakyRequest([RateLimited()] * 3)

    with pytest.raises(ExhaustedRetries) as exc_info:
        await call_with_retry(request, 3, sleep=recording_sleep)

    assert request.calls == 3
    assert exc_info.value.attempts == 3
    assert isinstance(exc_info.value.__cause__, RateLimited)
    assert recording_sleep.delays == [2.0, 4.0]


@pytest.mark.asyncio
async def test_upstream_error_is_not_retried(recording_sleep):
    request = FlakyRequest([UpstreamError("bad query", status_code=400)])

    with pytest.raises(UpstreamError):
        await call_with_retry(request, 3, sleep=recording_sleep)

    assert request.calls == 1
    assert recording_sleep.delays == []


@pytest.mark.asyncio
async def test_success_on_first_attempt_does_not_sleep(recording_sleep):
    request = FlakyRequest([])

    assert await call_with_retry(request, sleep=recording_sleep) == "ok"
    assert request.calls == 1
    assert recording_sleep.delays == []
