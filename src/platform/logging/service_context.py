"""
Service context for log lines.

Identifies which process of which deployment emitted a line, so logs from
several replicas can be told apart once collected.
"""

from functools import lru_cache
import os
import socket

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    host = socket.gethostname().split('.')[0][:12] or 'localhost'
    return f'{settings.SERVICE_NAME}@{settings.DEPLOY_ENV}:{host}:{os.getpid()}'
