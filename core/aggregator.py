# =============================================================================
# core/aggregator.py  —  Concurrent fan-out with per-branch failure isolation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Runs several independent provider calls at once, waits for ALL of them
#   (join semantics: a slow branch delays the result, it is never dropped),
#   and hands back one Outcome per call IN INPUT ORDER, whatever order the
#   branches finished in.
#
# FAILURE ISOLATION:
#   A branch that raises or times out yields an Outcome carrying the error.
#   Its siblings keep running.  Nothing is retried.
#
# LIMITS:
#   timeout  per-branch limit, seconds
#   limit    maximum branches in flight at once
#   budget   shared deadline for the whole aggregation; every branch gets
#            min(timeout, time left in the budget)
# =============================================================================

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, Sequence, TypeVar

from core.models import DestinationFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Outcome(Generic[T]):
    """The settled result of one branch: a value or an error, never both."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


def describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


async def gather_settled(
    calls: Sequence[Callable[[], Awaitable[T]]],
    *,
    timeout: Optional[float] = None,
    limit: Optional[int] = None,
    budget: Optional[float] = None,
) -> list[Outcome[T]]:
    """Run every call concurrently and return their outcomes in input order.

    Each element of ``calls`` is a zero-argument callable returning an
    awaitable, so a branch does not start before a concurrency slot is free.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + budget if budget is not None else None
    semaphore = asyncio.Semaphore(limit) if limit else None

    async def settle(call: Callable[[], Awaitable[T]]) -> Outcome[T]:
        branch_timeout = timeout
        if deadline is not None:
            remaining = max(deadline - loop.time(), 0.0)
            branch_timeout = remaining if branch_timeout is None else min(branch_timeout, remaining)
        try:
            if branch_timeout is None:
                value = await call()
            else:
                value = await asyncio.wait_for(call(), branch_timeout)
        except asyncio.TimeoutError:
            return Outcome(error=TimeoutError(f"timed out after {branch_timeout:g}s"))
        except Exception as exc:
            return Outcome(error=exc)
        return Outcome(value=value)

    async def run(call: Callable[[], Awaitable[T]]) -> Outcome[T]:
        if semaphore is None:
            return await settle(call)
        async with semaphore:
            return await settle(call)

    return list(await asyncio.gather(*(run(call) for call in calls)))


class Aggregator:
    """gather_settled() bound to the process-wide limits."""

    def __init__(
        self,
        timeout: Optional[float] = 10.0,
        limit: Optional[int] = 8,
        budget: Optional[float] = 30.0,
    ):
        self.timeout = timeout
        self.limit = limit
        self.budget = budget

    @classmethod
    def from_settings(cls, settings) -> "Aggregator":
        return cls(
            timeout=settings.provider_timeout,
            limit=settings.max_concurrent_calls,
            budget=settings.aggregation_budget,
        )

    async def gather(self, *calls: Callable[[], Awaitable[Any]]) -> list[Outcome]:
        return await gather_settled(
            calls, timeout=self.timeout, limit=self.limit, budget=self.budget
        )

    async def per_destination(
        self,
        destinations: Sequence[str],
        fetch: Callable[[str], Awaitable[T]],
        failure_message: str,
    ) -> list:
        """fetch() every destination; failed slots become DestinationFailure."""
        outcomes = await self.gather(*(_bind(fetch, d) for d in destinations))

        results = []
        for destination, outcome in zip(destinations, outcomes):
            if outcome.ok:
                results.append(outcome.value)
                continue
            logger.warning("%s for %s: %s", failure_message, destination, describe(outcome.error))
            results.append(DestinationFailure(
                destination=destination,
                error=f"{failure_message}: {describe(outcome.error)}",
            ))
        return results


def _bind(fetch: Callable[[str], Awaitable[T]], destination: str) -> Callable[[], Awaitable[T]]:
    return lambda: fetch(destination)
