"""
تنفيذ المهام في الخلفية (Fire-and-Forget)
CourseStream - Video Course Platform

يُستخدم لتحديث العدادات (المشاهدات / التحميلات) بدون انتظار،
حتى لا يتأخر بدء البث بسبب قاعدة البيانات.

Usage:
    fire_and_forget(VideoStorage.increment_views, video.pk)
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from functools import wraps

from django.conf import settings
from django.db import connection

logger = logging.getLogger('core')

_executor = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """Return the process-wide executor, creating it on first use."""
    global _executor
    if _executor is None:
        with _executor_lock:
            if _executor is None:
                _executor = ThreadPoolExecutor(
                    max_workers=getattr(settings, 'BACKGROUND_WORKERS', 4),
                    thread_name_prefix='background',
                )
    return _executor


def _isolated(func, close_connection: bool):
    """Wrap func so that it never raises into whoever runs it."""

    @wraps(func)
    def runner(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception:
            logger.exception(f"Background task {getattr(func, '__name__', func)!r} failed")
            return None
        finally:
            # worker threads open their own DB connection
            if close_connection:
                connection.close()

    return runner


def fire_and_forget(func, *args, **kwargs) -> None:
    """
    Dispatch func(*args, **kwargs) without waiting for it.

    Failures are logged and swallowed. With BACKGROUND_TASKS_ASYNC disabled
    the call runs inline, still isolated from the caller.
    """
    if not getattr(settings, 'BACKGROUND_TASKS_ASYNC', True):
        _isolated(func, close_connection=False)(*args, **kwargs)
        return

    try:
        get_executor().submit(_isolated(func, close_connection=True), *args, **kwargs)
    except RuntimeError:
        # executor shut down (interpreter exiting)
        logger.warning(f"Dropped background task {getattr(func, '__name__', func)!r}: executor unavailable")
