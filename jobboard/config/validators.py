"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Inspect a raw config mapping for settings that are valid but suspicious.

    Args:
        config_dict: Parsed YAML mapping

    Returns:
        List of warning messages (empty when nothing looks off)
    """
    messages = []

    broadcast = config_dict.get("broadcast", {})
    if isinstance(broadcast, dict):
        max_workers = broadcast.get("max_workers")
        if isinstance(max_workers, int) and max_workers > 32:
            messages.append(
                f"Large broadcast.max_workers ({max_workers}) gives no benefit for CPU-bound scoring"
            )
        timeout = broadcast.get("timeout_seconds")
        if isinstance(timeout, (int, float)) and 0 < timeout < 1:
            messages.append(
                f"Very short broadcast.timeout_seconds ({timeout}) may drop most notifications"
            )

    notifications = config_dict.get("notifications", {})
    if isinstance(notifications, dict):
        template = notifications.get("message_template")
        if isinstance(template, str) and "company" not in template:
            messages.append("notifications.message_template does not mention the company")

    return messages


def emit_warnings(messages: List[str]) -> None:
    """Emit each message as a ``UserWarning``."""
    for message in messages:
        warnings.warn(message, UserWarning, stacklevel=2)
