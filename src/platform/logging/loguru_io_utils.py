from inspect import getfile, getsourcelines
from os.path import basename
import re
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    MASK,
    MAX_LOGGED_CONTENT_LENGTH,
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


# Matches `pin='1234'` / `admin_pin="1111"` inside attrs/pydantic reprs
_SENSITIVE_REPR_PATTERN = re.compile(
    r"\b(" + '|'.join(sorted(SENSITIVE_KEYWORDS)) + r")=(SecretStr\('[^']*'\)|'[^']*'|\"[^\"]*\")"
)


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def enter_call() -> None:
    call_depth_var.set(call_depth_var.get() + 1)


def reset_call_depth() -> None:
    layer = max(call_depth_var.get() - 1, 0)
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    try:
        lineno = getsourcelines(target)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(target))}::{func.__qualname__}:{lineno}'


def mask_sensitive_repr(data: Any) -> Any:
    data_str = str(data)
    masked = _SENSITIVE_REPR_PATTERN.sub(rf"\1='{MASK}'", data_str)
    return data if masked == data_str else masked


def mask_sensitive(data: Any) -> Any:
    if isinstance(data, dict):
        return {
            key: MASK if key in SENSITIVE_KEYWORDS else mask_sensitive(value)
            for key, value in data.items()
        }
    if isinstance(data, list | tuple):
        return type(data)(mask_sensitive(item) for item in data)
    return mask_sensitive_repr(data)


def truncate_content(data: Any) -> Any:
    data_str = str(data)
    if len(data_str) <= MAX_LOGGED_CONTENT_LENGTH:
        return data
    return f'{data_str[:MAX_LOGGED_CONTENT_LENGTH]}...(+{len(data_str) - MAX_LOGGED_CONTENT_LENGTH})'
