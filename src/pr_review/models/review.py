from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Feedback(BaseModel):
    """A single finding returned by the AI for one hunk.

    ``line`` is the 1-based index into the hunk's lines. ``path`` is whatever
    the model echoed back and is informational only.
    """
    line: int | None = None
    body: str = Field(validation_alias=AliasChoices("body", "comment"))
    path: str | None = None


class ReviewResult(BaseModel):
    comments: list[Feedback] = []
    summary: str = ""


class Comment(BaseModel):
    """Inline review comment addressed by GitHub diff position."""
    model_config = ConfigDict(frozen=True)

    path: str
    position: int
    body: str
