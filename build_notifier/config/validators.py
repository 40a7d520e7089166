"""Additional validation utilities for rule configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    None of these conditions is an error: dangling group references and
    unresolvable users are simply skipped when recipients are resolved.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    groups = config_dict.get("groups") or []
    group_names = set()
    if isinstance(groups, list):
        for group in groups:
            if isinstance(group, dict) and isinstance(group.get("name"), str):
                group_names.add(group["name"].strip())

    converters = config_dict.get("converters") or []
    has_converters = isinstance(converters, list) and len(converters) > 0

    # Check users against the group directory
    users = config_dict.get("users") or []
    referenced_groups = set()
    if isinstance(users, list):
        for user in users:
            if not isinstance(user, dict):
                continue
            name = user.get("name", "Unknown")
            group = user.get("group")
            if isinstance(group, str) and group.strip():
                referenced_groups.add(group.strip())
                if group.strip() not in group_names:
                    warning_messages.append(
                        f"User '{name}' references undefined group '{group}' "
                        "and will not receive group notifications"
                    )
            if not user.get("address") and not has_converters:
                warning_messages.append(
                    f"User '{name}' has no address and no converters are configured; "
                    "it can never be notified"
                )

    # Check for groups nobody belongs to
    for group_name in sorted(group_names - referenced_groups):
        warning_messages.append(f"Group '{group_name}' has no members")

    # Check for repeated modifier notification types
    modifier_types = config_dict.get("modifier_notification_types") or []
    if isinstance(modifier_types, list):
        normalized = [t.strip().lower() for t in modifier_types if isinstance(t, str)]
        if len(normalized) != len(set(normalized)):
            duplicates = set([t for t in normalized if normalized.count(t) > 1])
            warning_messages.append(
                "Duplicate entries in modifier_notification_types have no extra effect: "
                f"{', '.join(sorted(duplicates))}"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
