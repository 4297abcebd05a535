# xpress/config.py
from __future__ import annotations
import logging
import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from typing import Optional

LOG_LEVEL_ENV = "XPRESS_LOG_LEVEL"


def _default_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()


@dataclass(frozen=True)
class EngineConfig:
    """
    Engine-wide settings.

    Attributes
    ----------
    float_format : str
        Format spec applied to floating constants when rendering.
    fold_constants : bool
        Evaluate operations whose operands are all scalar constants at
        construction time. Identity rules (x+0, x*1, ...) apply regardless.
    log_level : str
        Level used by `configure_logging` when none is given.
    """
    float_format: str = "g"
    fold_constants: bool = True
    log_level: str = field(default_factory=_default_log_level)


# Defaults shared by every thread; use_config() overrides are local to the
# current thread or asyncio task
global_config = EngineConfig()
_active_config: ContextVar[Optional[EngineConfig]] = ContextVar("xpress_config", default=None)


def get_config() -> EngineConfig:
    config = _active_config.get()
    return global_config if config is None else config


@contextmanager
def use_config(config: Optional[EngineConfig] = None, **overrides):
    """
    Context manager to temporarily replace the active configuration:
        with use_config(float_format=".3f"):
            render(expr, names)

    The override is visible only in the current thread (or asyncio task),
    so concurrent renders elsewhere keep their own settings.
    """
    active = replace(config or get_config(), **overrides)
    token = _active_config.set(active)
    try:
        yield active
    finally:
        _active_config.reset(token)


def configure_logging(level=None, stream=None) -> logging.Logger:
    """Attach a stream handler to the package logger (idempotent)."""
    logger = logging.getLogger("xpress")
    level = level if level is not None else get_config().log_level
    logger.setLevel(level)
    if not any(getattr(h, "_xpress_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
        handler._xpress_handler = True
        logger.addHandler(handler)
    return logger
