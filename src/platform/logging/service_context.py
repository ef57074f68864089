"""
Service context for log lines.

Identifies which process wrote a line when several app instances or the
background sweeper share one log collector.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'seating')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    host = os.getenv('HOSTNAME') or socket.gethostname()
    return f'{service_name}@{deploy_env}:{host[:12]}:{os.getpid()}'
