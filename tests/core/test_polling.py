"""
Condition poller timing and error policy, driven by a fake clock.
"""
import pytest

from fake_browser import FakeClock
from insider_qa.driver import NotFoundError, PollTimeout, StaleReferenceError, UnexpectedError
from insider_qa.polling import PollConfig, poll_until, wait_until


@pytest.mark.parametrize("timeout,interval", [(1.0, 0.25), (1.0, 0.375), (2.0, 0.5), (0.5, 0.5), (3.0, 0.75)])
def test_always_false_times_out_between_t_and_t_plus_interval(timeout, interval):
    clock = FakeClock()
    result = poll_until(lambda: False, PollConfig(timeout, interval), clock=clock, sleep=clock.sleep)

    assert not result.success
    assert result.timed_out
    assert result.error is None
    assert timeout <= result.elapsed <= timeout + interval
    assert all(s == interval for s in clock.sleeps)


def test_first_evaluation_is_immediate():
    clock = FakeClock()
    result = poll_until(lambda: "ready", PollConfig(1.0, 0.25), clock=clock, sleep=clock.sleep)

    assert result.success
    assert result.value == "ready"
    assert result.attempts == 1
    assert clock.sleeps == []


@pytest.mark.parametrize("becomes_true_at", [0.1, 0.25, 1.1, 4.9])
def test_success_reported_within_one_interval_of_condition(becomes_true_at):
    clock = FakeClock()
    config = PollConfig(timeout=5.0, interval=0.25)
    result = poll_until(lambda: clock() >= becomes_true_at, config, clock=clock, sleep=clock.sleep)

    assert result.success
    assert becomes_true_at <= result.elapsed < becomes_true_at + config.interval


def test_ignored_errors_mean_not_yet():
    clock = FakeClock()
    errors = [NotFoundError("not rendered"), StaleReferenceError("re-rendered")]

    def predicate():
        if errors:
            raise errors.pop(0)
        return "element"

    result = poll_until(predicate, PollConfig(2.0, 0.2), clock=clock, sleep=clock.sleep)

    assert result.success
    assert result.value == "element"
    assert result.attempts == 3


def test_other_errors_abort_immediately():
    clock = FakeClock()
    boom = UnexpectedError("javascript error")

    def predicate():
        raise boom

    result = poll_until(predicate, PollConfig(2.0, 0.2), clock=clock, sleep=clock.sleep)

    assert not result.success
    assert not result.timed_out
    assert result.error is boom
    assert result.attempts == 1
    assert clock.sleeps == []


def test_custom_ignored_errors():
    clock = FakeClock()
    config = PollConfig(1.0, 0.25, ignored=(UnexpectedError,))

    def predicate():
        raise UnexpectedError("flaky")

    result = poll_until(predicate, config, clock=clock, sleep=clock.sleep)

    assert result.timed_out


def test_wait_until_returns_value():
    clock = FakeClock()
    assert wait_until(lambda: 42, PollConfig(1.0, 0.25), clock=clock, sleep=clock.sleep) == 42


def test_wait_until_raises_timeout():
    clock = FakeClock()
    with pytest.raises(PollTimeout, match="job list"):
        wait_until(lambda: None, PollConfig(1.0, 0.25), "job list", clock=clock, sleep=clock.sleep)


def test_wait_until_reraises_unrecoverable_error():
    clock = FakeClock()

    def predicate():
        raise UnexpectedError("session deleted")

    with pytest.raises(UnexpectedError, match="session deleted"):
        wait_until(predicate, PollConfig(1.0, 0.25), clock=clock, sleep=clock.sleep)


@pytest.mark.parametrize("timeout,interval", [(1.0, 0), (1.0, -0.1), (1.0, 2.0)])
def test_invalid_config_rejected(timeout, interval):
    with pytest.raises(ValueError):
        PollConfig(timeout=timeout, interval=interval)


def test_with_timeout_keeps_interval_within_deadline():
    config = PollConfig(timeout=10.0, interval=0.2)

    assert config.with_timeout(5.0) == PollConfig(timeout=5.0, interval=0.2)
    assert config.with_timeout(0.1).interval == 0.1
