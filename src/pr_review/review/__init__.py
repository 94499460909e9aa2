from .parser import parse_diff, ParsedFile, Hunk
from .prompts import build_review_prompt
from .assembler import assemble_review, comment_position, ReviewCancelled
from .engine import ReviewEngine, EngineReviewResult

__all__ = [
    "parse_diff",
    "ParsedFile",
    "Hunk",
    "build_review_prompt",
    "assemble_review",
    "comment_position",
    "ReviewCancelled",
    "ReviewEngine",
    "EngineReviewResult",
]
