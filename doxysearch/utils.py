import time
from loguru import logger


__all__ = ["timer"]


class timer:
    def __init__(self, message: str, log_start=False):
        self.message = message
        self.log_start = log_start

    def __enter__(self):
        if self.log_start:
            logger.debug(f"{self.message} - started")
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.elapsed = time.perf_counter() - self.start_time
        logger.debug(f"{self.message} - completed ({self.elapsed:.4f} seconds)")
