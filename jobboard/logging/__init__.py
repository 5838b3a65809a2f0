"""Structured logging helpers for the job board notifier."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that tags every record with a component name.

    Fields passed through ``extra`` on the individual call win over the
    adapter defaults.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a module logger, optionally bound to a component.

    Args:
        name: Logger name (usually ``__name__``)
        component: Component label added to every record (e.g. "broadcaster")

    Returns:
        ``logging.Logger`` or a ``ComponentLoggerAdapter`` wrapping it

    Example:
        >>> logger = get_logger(__name__, component="jobs")
        >>> logger.info("Job stored", extra={"event": "job.created"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger
