"""Status transitions for job alerts and resume distributions."""

from portfolio.errors import ValidationError

JOB_ALERT_TRANSITIONS: dict[str, set[str]] = {
    "identified": {"applied", "rejected"},
    "applied": {"interview", "rejected"},
    "interview": {"accepted", "rejected"},
    "rejected": set(),
    "accepted": set(),
}

DISTRIBUTION_TRANSITIONS: dict[str, set[str]] = {
    "sent": {"viewed", "responded", "rejected"},
    "viewed": {"responded", "rejected"},
    "responded": {"interview", "rejected"},
    "interview": {"accepted", "rejected"},
    "rejected": set(),
    "accepted": set(),
}


def check_transition(transitions: dict[str, set[str]], current: str, new: str) -> None:
    """Raise ValidationError unless ``current -> new`` is allowed."""
    if new not in transitions:
        raise ValidationError(f"Unknown status: {new}")
    if new not in transitions.get(current, set()):
        raise ValidationError(f"Cannot move from '{current}' to '{new}'")
