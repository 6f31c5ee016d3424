from __future__ import annotations
import logging
import os
from typing import Optional


_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_PROMPT = '> '


def value_from_env(var: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def get_log_level() -> int:
    name = value_from_env('TOYLISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    # getLevelName maps unknown names to the string "Level <name>"
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level in TOYLISP_LOG_LEVEL: {name!r}")
    return level


def get_prompt() -> str:
    # the prompt keeps its trailing space, so read it unstripped
    return os.environ.get('TOYLISP_PROMPT') or _DEFAULT_PROMPT


def get_recursion_limit() -> Optional[int]:
    raw = value_from_env('TOYLISP_RECURSION_LIMIT')
    if raw is None:
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"TOYLISP_RECURSION_LIMIT must be an integer, got {raw!r}") from None
    if limit <= 0:
        raise ValueError(f"TOYLISP_RECURSION_LIMIT must be positive, got {limit}")
    return limit
