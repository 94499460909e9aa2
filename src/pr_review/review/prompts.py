from .parser import Hunk, ParsedFile


REVIEW_PROMPT = """Your task is to review pull requests. Instructions:
- Provide comments and suggestions ONLY if there is something to improve.
- Focus on bugs, security issues, and performance problems.
- Avoid generic comments and highlight critical issues.
- If the code looks good, return an empty comments array.

Return ONLY valid JSON in this exact format:
{{
  "comments": [
    {{
      "line": <1-based line number within the diff context below>,
      "body": "<your comment text>"
    }}
  ],
  "summary": "<one sentence summary of the change>"
}}

File: {file_path}
Pull Request Title: {title}
Pull Request Description: {description}

Diff Context:
```diff
{hunk_content}```
"""


def build_review_prompt(file: ParsedFile, hunk: Hunk, title: str, description: str) -> str:
    """Render the review prompt for a single hunk."""
    return REVIEW_PROMPT.format(
        file_path=file.path,
        title=title,
        description=description,
        hunk_content=hunk.content,
    )
