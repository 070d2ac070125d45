"""
Decorators Module
Timing decorator for backend calls
"""

import asyncio
import functools
import time
from typing import Callable

from .logger import logger


def timed(func: Callable):
    """
    Decorator to log execution time of a function.

    Works on both coroutine functions and plain functions.
    """
    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start_time
            logger.debug(f"{func.__qualname__} executed in {elapsed:.3f}s")
    
    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start_time
            logger.debug(f"{func.__qualname__} executed in {elapsed:.3f}s")
    
    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper
