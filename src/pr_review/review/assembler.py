# src/pr_review/review/assembler.py
import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from pr_review.models.review import Comment, Feedback
from .parser import Hunk, ParsedFile
from .prompts import build_review_prompt


logger = logging.getLogger(__name__)

AnalysisFn = Callable[[str], Awaitable[Sequence[Feedback]]]


class ReviewCancelled(Exception):
    """Raised when assembly is cancelled between hunks.

    ``comments`` holds every comment completed before the cancellation.
    """

    def __init__(self, comments: list[Comment]):
        super().__init__(f"Review cancelled after {len(comments)} comments")
        self.comments = comments


def comment_position(hunk: Hunk, line: int | None) -> int:
    """Map a 1-based line inside a hunk to its GitHub diff position.

    Missing or out-of-range lines anchor on the last line of the hunk.
    """
    if line is None or not 1 <= line <= len(hunk.lines):
        line = len(hunk.lines)
    return hunk.position + line


async def assemble_review(
    files: Sequence[ParsedFile],
    title: str,
    description: str,
    analyze: AnalysisFn,
    *,
    fail_fast: bool = True,
    cancel: asyncio.Event | None = None,
) -> list[Comment]:
    """Run the analysis once per hunk and collect comments in diff order.

    With ``fail_fast`` the first analysis error propagates and nothing is
    returned. Otherwise the failing hunk is logged and skipped.
    """
    comments: list[Comment] = []

    for file in files:
        if not file.path or not file.hunks:
            logger.debug(f"Skipping {file.path or '<unknown>'}: nothing to review")
            continue

        for hunk in file.hunks:
            if cancel is not None and cancel.is_set():
                raise ReviewCancelled(comments)

            prompt = build_review_prompt(file, hunk, title, description)

            try:
                feedback = await analyze(prompt)
            except Exception as e:
                if fail_fast:
                    raise
                logger.warning(f"Analysis failed for {file.path} {hunk.header}: {e}")
                continue

            for item in feedback:
                if item.path and item.path != file.path:
                    logger.debug(f"Ignoring feedback path {item.path}, attributing to {file.path}")
                comments.append(Comment(
                    path=file.path,
                    position=comment_position(hunk, item.line),
                    body=item.body,
                ))

    return comments
