"""Structured logging setup for Key Guardian."""
from __future__ import annotations

import logging
import sys
from typing import Dict, List

import structlog

_DEFAULT_LEVEL = "info"
_LEVELS: Dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
# Event fields that could carry raw or wrapped key bytes
_KEY_MATERIAL_FIELDS = frozenset({"plaintext_key", "encrypted_key", "kek", "key"})


def configure_logging(level: str | None = None) -> None:
    """Route structlog events through stdlib logging as JSON lines.

    Each line carries ``ts``, ``level``, ``msg`` and ``component`` along with
    the context bound by the caller. Key-material fields never reach the
    renderer. Unknown level names fall back to ``info``.
    """

    numeric_level = _LEVELS.get((level or _DEFAULT_LEVEL).lower(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stdout)],
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=_processors(),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def _processors() -> List[structlog.types.Processor]:
    return [
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.stdlib.add_log_level,
        _add_component,
        _redact_key_material,
        _event_as_msg,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def _add_component(
    logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    # Default the component to the emitting module's logger name
    event_dict.setdefault("component", getattr(logger, "name", None) or "key_guardian")
    return event_dict


def _redact_key_material(
    _logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    for field in _KEY_MATERIAL_FIELDS.intersection(event_dict):
        event_dict[field] = "<redacted>"
    return event_dict


def _event_as_msg(
    _logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    if "msg" not in event_dict:
        event_dict["msg"] = event_dict.pop("event", "")
    return event_dict


__all__ = ["configure_logging"]
