# modresolve/resolution/fanout.py
from __future__ import annotations
from collections.abc import Callable, Generator, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

__all__ = ["mapOrdered"]

T = TypeVar("T")
R = TypeVar("R")



def mapOrdered(func: Callable[[T], R], items: Iterable[T], *, maxWorkers: int) -> Generator[R, None, None]:
    """
    Run `func` over `items` on a bounded thread pool and yield results in *input*
    order, whatever order the workers finish in.

    The input set is fixed before any work starts. Closing the generator early
    (a consumer that found its answer) cancels the calls that have not started
    yet; calls already running finish in the background, they are pure reads.
    An exception raised by `func` surfaces at the position of its item.
    """
    inputs = list(items)
    if len(inputs) <= 1 or maxWorkers <= 1:
        for item in inputs:
            yield func(item)
        return

    pool = ThreadPoolExecutor(
        max_workers=min(maxWorkers, len(inputs)),
        thread_name_prefix="modresolve-probe",
    )
    try:
        yield from pool.map(func, inputs)
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
