#!/usr/bin/env python3
"""
Fan-out helper for independent per-application work.
"""

from multiprocessing.pool import ThreadPool


def run_parallel(tasks, processes=None):
    """
    Run every task in a thread pool and return their results in task order.

    All tasks are dispatched and joined before any result is looked at, so a
    failing task never stops its siblings and work they already did is kept.
    If any task raised, the first error found is re-raised.

    Args:
        tasks: List of zero-argument callables
        processes: Pool size (None means one thread per CPU)

    Returns:
        List of task return values
    """
    if not tasks:
        return []

    pool = ThreadPool(processes)
    try:
        pending = [pool.apply_async(task) for task in tasks]
        pool.close()
        pool.join()
    finally:
        pool.terminate()

    results = []
    errors = []
    for item in pending:
        try:
            results.append(item.get())
        except Exception as e:
            errors.append(e)

    if errors:
        raise errors[0]
    return results
