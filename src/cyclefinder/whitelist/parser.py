"""
Whitelist entry parser.

Turns rule-file lines into WhitelistRule objects. A line holds at most one
rule; ``#`` starts a comment that runs to the end of the line.

Functions:
- strip_comment: remove the comment suffix and surrounding whitespace
- parse_entry: parse one comment-free entry (raises on anything invalid)
- parse_line: parse one raw line (blank and comment-only lines yield None)
- iter_rules: parse a sequence of lines, attaching line numbers
"""

from collections.abc import Iterable, Iterator

from cyclefinder.shared.domain.exceptions import MalformedRuleError
from cyclefinder.whitelist.models import RuleKind, RuleSource, WhitelistRule

COMMENT_CHAR = "#"

# Number of tokens (keyword included) each kind accepts
_TOKEN_COUNTS: dict[RuleKind, tuple[int, ...]] = {
    RuleKind.FIELD: (2, 3),
    RuleKind.TYPE: (2,),
    RuleKind.NAMESPACE: (2,),
    RuleKind.OUTER: (2,),
}


def strip_comment(line: str) -> str:
    """Return the part of a line before the first '#', trimmed."""
    return line.split(COMMENT_CHAR, 1)[0].strip()


def parse_entry(entry: str, source: RuleSource | None = None) -> WhitelistRule:
    """
    Parse a single whitelist entry.

    Args:
        entry: Entry text without a comment
        source: Optional location, reported in errors and kept on the rule

    Returns:
        The parsed rule

    Raises:
        MalformedRuleError: If the entry has fewer than two tokens, an unknown
            keyword, or a token count the keyword does not support
    """
    tokens = entry.split()
    if len(tokens) < 2:
        raise _bad_entry(entry, source)

    kind = RuleKind.from_keyword(tokens[0])
    if kind is None or len(tokens) not in _TOKEN_COUNTS[kind]:
        raise _bad_entry(entry, source)

    type_name = tokens[2] if len(tokens) == 3 else None
    return WhitelistRule(kind=kind, name=tokens[1], type_name=type_name, source=source)


def parse_line(line: str, source: RuleSource | None = None) -> WhitelistRule | None:
    """
    Parse a raw whitelist file line.

    Returns None for blank and comment-only lines.
    """
    entry = strip_comment(line)
    if not entry:
        return None
    return parse_entry(entry, source)


def iter_rules(lines: Iterable[str], path: str | None = None) -> Iterator[WhitelistRule]:
    """
    Yield the rules found in a sequence of lines.

    Line numbers start at 1. The first malformed line raises, so a caller
    draining the iterator never sees rules from a partially valid input
    unless it chooses to keep them.
    """
    for line_number, line in enumerate(lines, start=1):
        rule = parse_line(line, RuleSource(path=path, line=line_number))
        if rule is not None:
            yield rule


def _bad_entry(entry: str, source: RuleSource | None) -> MalformedRuleError:
    if source is None:
        return MalformedRuleError(entry)
    return MalformedRuleError(entry, path=source.path, line=source.line)
