from __future__ import annotations
import logging
import os


_TRUTHY = {"1", "true", "yes", "on"}

_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_RECURSION_LIMIT = 10_000


def env_flag(var: str) -> bool:
    raw = os.environ.get(var)
    if raw is None:
        return False
    return raw.strip().lower() in _TRUTHY


def get_log_level() -> int:
    raw = os.environ.get('KORISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def debug_tokens() -> bool:
    return env_flag('KORISP_DEBUG_TOKENS')


def debug_expansion() -> bool:
    return env_flag('KORISP_DEBUG_EXPANSION')


def get_recursion_limit() -> int:
    raw = os.environ.get('KORISP_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return max(int(raw), 1000)
    except ValueError:
        return _DEFAULT_RECURSION_LIMIT
