import time

class Timer:
    def __init__(self, label: str = ""):
        self.label = label
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()
        return False

    def _prefix(self) -> str:
        return f"{self.label}: " if self.label else ""

    def start(self):
        """Start the timer."""
        self.start_time = time.perf_counter()
        self.end_time = None

    def stop(self):
        """Stop the timer and print the elapsed time."""
        if self.start_time is None:
            print(f"{self._prefix()}Timer was not started.")
            return

        self.end_time = time.perf_counter()
        print(f"{self._prefix()}Elapsed time: {self.end_time - self.start_time:.3f} seconds")

    def elapsed(self):
        """Return the elapsed time without stopping."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time
