from contextlib import ContextDecorator
import time


class ExecutionTimer(ContextDecorator):
    def __enter__(self):
        self.start_time = time.perf_counter()
        self.execution_time = None
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.execution_time = time.perf_counter() - self.start_time
        return False

    def get_execution_time(self) -> float:
        if self.execution_time is not None:
            return self.execution_time
        return time.perf_counter() - self.start_time
