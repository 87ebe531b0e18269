import time


class Timer:
    """
    A context manager to measure the duration of a reconciliation step.

    Usage:
    >>> with Timer() as timer:
    >>>     reconciler.apply(promotions, demotions)
    >>> print(f"Applied changes in {timer.elapsed():.2f} seconds.")
    """

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()

    def elapsed(self) -> float:
        return self.end_time - self.start_time
