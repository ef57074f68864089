"""
Test Configuration

Environment setup MUST happen before application modules are imported:
settings and the loguru sinks are built at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    os.environ['KVROCKS_KEY_PREFIX'] = 'test_' if worker_id == 'master' else f'test_{worker_id}_'

    # Unit and API tests always run against the in-memory store
    os.environ['STORE_BACKEND'] = 'memory'
    os.environ['EXPIRY_SWEEP_INTERVAL_SECONDS'] = '0'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()
