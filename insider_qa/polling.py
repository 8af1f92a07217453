"""
Bounded condition polling.

`poll_until` is the only waiting primitive in the package: every readiness
wait, overlay wait and "did a new tab open" check goes through it.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Type

from insider_qa.driver import NotFoundError, PollTimeout, StaleReferenceError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.2
DEFAULT_IGNORED: Tuple[Type[BaseException], ...] = (NotFoundError, StaleReferenceError)


@dataclass(frozen=True)
class PollConfig:
    timeout: float = 10.0
    interval: float = DEFAULT_INTERVAL
    ignored: Tuple[Type[BaseException], ...] = DEFAULT_IGNORED

    def __post_init__(self):
        if self.interval <= 0:
            raise ValueError(f"Poll interval must be positive (interval={self.interval})")
        if self.interval > self.timeout:
            raise ValueError(f"Poll interval {self.interval}s exceeds timeout {self.timeout}s")

    def with_timeout(self, timeout: float) -> "PollConfig":
        """Same interval and ignored errors, different deadline."""
        return PollConfig(timeout=timeout, interval=min(self.interval, timeout), ignored=self.ignored)


@dataclass
class PollResult:
    success: bool
    value: Any = None
    timed_out: bool = False
    error: Optional[BaseException] = None
    elapsed: float = 0.0
    attempts: int = field(default=0)

    def __bool__(self) -> bool:
        return self.success


def poll_until(
    predicate: Callable[[], Any],
    config: PollConfig,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> PollResult:
    """
    Evaluate `predicate` until it returns something truthy or `config.timeout` elapses.

    - The first evaluation happens immediately, then one per `config.interval`.
    - Errors listed in `config.ignored` count as "not yet".
    - Any other error stops polling and is reported in `PollResult.error`.
    """
    start = clock()
    attempts = 0
    while True:
        attempts += 1
        try:
            value = predicate()
            if value:
                return PollResult(True, value=value, elapsed=clock() - start, attempts=attempts)
        except config.ignored as e:
            logger.debug(f"Poll attempt {attempts} ignored {type(e).__name__}: {e}")
        except Exception as e:
            return PollResult(False, error=e, elapsed=clock() - start, attempts=attempts)

        elapsed = clock() - start
        if elapsed >= config.timeout:
            return PollResult(False, timed_out=True, elapsed=elapsed, attempts=attempts)
        sleep(config.interval)


def wait_until(
    predicate: Callable[[], Any],
    config: PollConfig,
    message: str = "",
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """Like `poll_until` but returns the truthy value, raising `PollTimeout` on deadline."""
    result = poll_until(predicate, config, clock=clock, sleep=sleep)
    if result.success:
        return result.value
    if result.error is not None:
        raise result.error
    raise PollTimeout(f"Timed out after {config.timeout}s{': ' + message if message else ''}")
