"""Free-text answer grading against reference radio messages."""

import re

from .config import (
    PASS_THRESHOLD_DE, PASS_THRESHOLD_EN,
    FUZZY_MIN_TOKEN_LENGTH, FUZZY_MAX_DISTANCE,
    MSG_PASSED, MSG_FAILED, MODE_DE
)
from .utils import tokenize, unique, collapse_whitespace

# Matched on the raw reference text. Digits are ASCII only; \s also covers
# non-breaking spaces from pasted PDF text.
_COORDINATE = re.compile(r'\b[0-9]{2}-[0-9]{2}\s[NS]\s[0-9]{3}-[0-9]{2}\s[EW]\b')
_CALL_SIGN = re.compile(r'/([A-Z0-9]{3,6})\b')
_UTC_TIME = re.compile(r'\b[0-9]{4}\sUTC\b')
_VHF_CHANNEL = re.compile(r'\bVHF\schannel\s[0-9]+\b', re.IGNORECASE)


class GradeResult:
    """Verdict for one graded answer."""

    def __init__(self, passed: bool, similarity: float, threshold: float,
                 missing_required_tokens: list[str], required_tokens: list[str]):
        self.passed = passed
        self.similarity = similarity
        self.threshold = threshold
        self.missing_required_tokens = missing_required_tokens
        self.required_tokens = required_tokens

    @property
    def text(self) -> str:
        return format_report(self)

    def to_dict(self) -> dict:
        return {
            'passed': self.passed,
            'similarity': self.similarity,
            'threshold': self.threshold,
            'missing_required_tokens': self.missing_required_tokens,
            'required_tokens': self.required_tokens,
            'text': self.text
        }


def extract_required_tokens(reference: str | None) -> list[str]:
    """Find coordinates, call signs, UTC times and VHF channels in a reference.

    These must be reproduced verbatim by a passing answer. Returned in
    category order (coordinates, call signs, times, channels), deduplicated.
    """
    reference = reference or ''
    coords = _COORDINATE.findall(reference)
    calls = _CALL_SIGN.findall(reference)
    times = _UTC_TIME.findall(reference)
    channels = _VHF_CHANNEL.findall(reference)
    return unique([collapse_whitespace(tok) for tok in coords + calls + times + channels])


def find_missing_tokens(user_text: str | None, required: list[str]) -> list[str]:
    """Required tokens that do not occur in user_text, ignoring case and spacing width."""
    haystack = collapse_whitespace(user_text).lower()
    return [tok for tok in required if tok.lower() not in haystack]


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit cost insert, delete and substitute."""
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost
            )
    return dp[m][n]


def _fuzzy_hit(word: str, candidates: set[str]) -> bool:
    if len(word) < FUZZY_MIN_TOKEN_LENGTH:
        return False
    for candidate in candidates:
        if len(candidate) == len(word) and levenshtein(word, candidate) <= FUZZY_MAX_DISTANCE:
            return True
    return False


def similarity(user_text: str | None, reference_text: str | None) -> float:
    """Token overlap of user_text against reference_text, in [0, 1].

    Each user token counts at most once: either verbatim in the reference
    or, for longer tokens, one typo away from a reference token of the same
    length. Reference tokens may be matched repeatedly. Not symmetric.
    """
    user_tokens = tokenize(user_text)
    ref_tokens = tokenize(reference_text)
    if not user_tokens or not ref_tokens:
        return 0.0

    ref_set = set(ref_tokens)
    hits = 0
    for word in user_tokens:
        if word in ref_set or _fuzzy_hit(word, ref_set):
            hits += 1

    score = hits / (len(user_tokens) + len(ref_tokens) - hits)
    return max(0.0, min(1.0, score))


def threshold_for(mode: str) -> float:
    """Pass threshold for an answer language ('de' or 'en')."""
    return PASS_THRESHOLD_DE if mode == MODE_DE else PASS_THRESHOLD_EN


def grade(user_text: str | None, reference_text: str | None, mode: str) -> GradeResult:
    """Grade a free-text answer.

    Passes only if every required token is present AND the similarity
    reaches the threshold for the mode.
    """
    required = extract_required_tokens(reference_text)
    missing = find_missing_tokens(user_text, required)
    sim = similarity(user_text, reference_text)
    threshold = threshold_for(mode)
    passed = not missing and sim >= threshold
    return GradeResult(passed, sim, threshold, missing, required)


def format_report(result: GradeResult) -> str:
    """Multi-line report for display."""
    lines = [MSG_PASSED if result.passed else MSG_FAILED]
    lines.append(f"Ähnlichkeit: {_percent(result.similarity)}% (Schwelle {_percent(result.threshold)}%)")
    if result.missing_required_tokens:
        lines.append(f"Fehlende Pflichtteile: {', '.join(result.missing_required_tokens)}")
    if result.required_tokens:
        lines.append(f"Pflichtteile erkannt: {', '.join(result.required_tokens)}")
    return '\n'.join(lines)


def _percent(value: float) -> int:
    # Half-up; round() would round halves to even
    return int(value * 100 + 0.5)
