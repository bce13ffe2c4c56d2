import re

from github_chat_bot.models.references import Reference

CODE_BLOCK_PATTERN = re.compile(r"```[\s\S]*?```")

# `#N`, `repo#N` or `owner/repo#N`. An owner is only accepted in front of a repo.
REFERENCE_PATTERN = re.compile(r"(?:(?:(?P<owner>[\w.-]+)/)?(?P<repo>[\w.-]+))?#(?P<number>[1-9]\d*)\b")

Span = tuple[int, int]


def find_code_block_spans(text: str) -> list[Span]:
    """Return the (start, end) offsets of every fenced code block, backticks included."""

    return [match.span() for match in CODE_BLOCK_PATTERN.finditer(text)]


def is_within_spans(start: int, end: int, spans: list[Span]) -> bool:
    return any(span_start <= start and end <= span_end for span_start, span_end in spans)


def extract_references_from_text(text: str, home_owner: str, home_repo: str) -> list[Reference]:
    """Extract every reference outside of code blocks, in order of appearance and keeping duplicates.

    For example, with `immich-app/immich` as the home repository:
    `#1234 static-pages#12` -> immich-app/immich#1234, immich-app/static-pages#12
    ```
    #4242
    ``` -> nothing"""

    code_block_spans: list[Span] = find_code_block_spans(text)

    return [
        Reference.from_match(match, home_owner=home_owner, home_repo=home_repo)
        for match in REFERENCE_PATTERN.finditer(text)
        if not is_within_spans(*match.span(), spans=code_block_spans)
    ]


def filter_low_numbered_references(references: list[Reference], minimum_number: int) -> list[Reference]:
    """Drop unqualified references below the minimum number. Qualified references are always kept."""

    return [reference for reference in references if reference.qualified or reference.number >= minimum_number]
