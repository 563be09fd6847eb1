import logging
from collections.abc import Sequence

from splint.models.rule import Rule, RuleSet
from splint.models.token import Token

logger = logging.getLogger(__name__)

Window = tuple[Token, ...]
Match = tuple[int, Window]


def _first_match(rule: Rule, tokens: Sequence[Token], cursor: int) -> int | None:
    """Index of the leftmost contiguous occurrence of ``rule.pattern`` at or after ``cursor``."""
    pattern = rule.pattern
    first = pattern[0]
    size = len(pattern)
    for start in range(cursor, len(tokens) - size + 1):
        if not first.matches(tokens[start]):
            continue
        if all(
            needle.matches(tokens[start + offset])
            for offset, needle in enumerate(pattern[1:], start=1)
        ):
            return start
    return None


def find_matches(rule: Rule, tokens: Sequence[Token]) -> list[Match]:
    """Find every non-overlapping occurrence of a rule's pattern.

    Scans left to right and takes the leftmost start that matches the whole
    pattern contiguously. The scan then resumes at the first token that starts
    at or after the end of the matched window's last token.

    Args:
        rule: Rule whose pattern is searched for.
        tokens: Flattened tokens of one file, in document order.

    Returns:
        ``(start_index, window)`` pairs in increasing source order.
    """
    size = len(rule.pattern)
    matches: list[Match] = []
    if len(tokens) < size:
        return matches

    cursor = 0
    while len(tokens) - cursor >= size:
        start = _first_match(rule, tokens, cursor)
        if start is None:
            break

        window: Window = tuple(tokens[start : start + size])
        matches.append((start, window))

        resume = window[-1].span.end
        cursor = start + size
        while cursor < len(tokens) and tokens[cursor].span.start < resume:
            cursor += 1

    return matches


def match_rules(rules: RuleSet, tokens: Sequence[Token]) -> list[tuple[Rule, Window]]:
    """Match every rule of a set independently against the same tokens.

    Results are concatenated in rule declaration order.
    """
    found: list[tuple[Rule, Window]] = []
    for rule_id, rule in rules.rules.items():
        matches = find_matches(rule, tokens)
        if matches:
            logger.debug("Rule %s matched %d time(s)", rule_id, len(matches))
        found.extend((rule, window) for _, window in matches)
    return found
