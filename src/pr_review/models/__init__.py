from .config import RepoConfig
from .event import EventPayloadError, PRDetails, pr_details_from_event
from .review import Comment, Feedback, ReviewResult

__all__ = [
    "RepoConfig",
    "EventPayloadError",
    "PRDetails",
    "pr_details_from_event",
    "Comment",
    "Feedback",
    "ReviewResult",
]
