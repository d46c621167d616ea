import random

import pytest

from conftest import FakeProvider, RecordingSleep, ZeroRandom, make_response
from search_dispatch.dispatch.retry import RetryExecutor, RetryPolicy
from search_dispatch.providers.base.models import ProviderType, SearchQuery
from search_dispatch.providers.exceptions import DispatchError


QUERY = SearchQuery(query="test")


def test_returns_result_on_first_success(executor, sleep):
    provider = FakeProvider(ProviderType.TAVILY)

    response = executor.run(provider, QUERY)

    assert len(response.results) == 1
    assert len(provider.calls) == 1
    assert sleep.calls == []


def test_retries_transient_error_then_succeeds(executor, sleep):
    provider = FakeProvider(ProviderType.TAVILY, [RuntimeError("Rate limit exceeded"), "ok"])

    response = executor.run(provider, QUERY)

    assert response is not None
    assert len(provider.calls) == 2
    assert sleep.calls == [1.0]


def test_permanent_error_is_not_retried(executor, sleep):
    provider = FakeProvider(ProviderType.TAVILY, [RuntimeError("Invalid API key")])

    with pytest.raises(RuntimeError, match="Invalid API key"):
        executor.run(provider, QUERY)

    assert len(provider.calls) == 1
    assert sleep.calls == []


def test_exhausted_retries_raise_the_last_error(executor):
    errors = [RuntimeError("Error 503 first"), RuntimeError("Error 503 second"), RuntimeError("Error 503 third")]
    provider = FakeProvider(ProviderType.BRAVE, errors)

    with pytest.raises(RuntimeError) as excinfo:
        executor.run(provider, QUERY, max_attempts=3)

    assert excinfo.value is errors[2]
    assert len(provider.calls) == 3


def test_two_attempts_with_etimedout(executor, sleep):
    provider = FakeProvider(ProviderType.SERPAPI, [RuntimeError("ETIMEDOUT")])

    with pytest.raises(RuntimeError) as excinfo:
        executor.run(provider, QUERY, max_attempts=2)

    assert str(excinfo.value) == "ETIMEDOUT"
    assert len(provider.calls) == 2
    assert sleep.calls == [1.0]


def test_single_attempt_never_retries(executor, sleep):
    provider = FakeProvider(ProviderType.TAVILY, [RuntimeError("Rate limit exceeded")])

    with pytest.raises(RuntimeError, match="Rate limit exceeded"):
        executor.run(provider, QUERY, max_attempts=1)

    assert len(provider.calls) == 1
    assert sleep.calls == []


def test_backoff_doubles_without_jitter():
    sleep = RecordingSleep()
    executor = RetryExecutor(policy=RetryPolicy(max_attempts=4), rng=ZeroRandom(), sleep=sleep)
    provider = FakeProvider(ProviderType.TAVILY, [RuntimeError("429")] * 3 + ["ok"])

    executor.run(provider, QUERY)

    assert sleep.calls == [1.0, 2.0, 4.0]


def test_jitter_stays_within_bound():
    sleep = RecordingSleep()
    executor = RetryExecutor(policy=RetryPolicy(max_attempts=3), rng=random.Random(7), sleep=sleep)
    provider = FakeProvider(ProviderType.TAVILY, [RuntimeError("timeout")])

    with pytest.raises(RuntimeError):
        executor.run(provider, QUERY)

    first, second = sleep.calls
    assert 1.0 <= first <= 1.5
    assert 2.0 <= second <= 2.5


def test_response_provider_is_stamped_with_serving_provider(executor):
    wrong = make_response(QUERY, ProviderType.GOOGLE)
    provider = FakeProvider(ProviderType.BRAVE, [wrong])

    response = executor.run(provider, QUERY)

    assert response.provider is ProviderType.BRAVE


def test_empty_result_raises_dispatch_failed(executor):
    provider = FakeProvider(ProviderType.TAVILY, [None])

    with pytest.raises(DispatchError, match="Dispatch failed"):
        executor.run(provider, QUERY)


def test_invalid_max_attempts_rejected(executor):
    with pytest.raises(ValueError):
        executor.run(FakeProvider(ProviderType.TAVILY), QUERY, max_attempts=0)


def test_delay_formula():
    policy = RetryPolicy(base_delay_ms=1000, jitter_max_ms=0)
    rng = random.Random(1)
    assert [policy.delay_ms(n, rng) for n in (1, 2, 3, 4)] == [1000, 2000, 4000, 8000]
