"""
text_match.py - Text Matching Tools

Provides substring search, removal and replacement helpers used by the
rename operations
"""

from typing import Optional
import re


def _compile(keyword: str) -> "re.Pattern[str]":
    return re.compile(re.escape(keyword), re.IGNORECASE)


def find_first(text: str, keyword: str, case_sensitive: bool = True) -> Optional[re.Match]:
    """
    Find the leftmost match of keyword

    Args:
        text: Text to search
        keyword: Keyword (must not be empty)
        case_sensitive: Whether case-sensitive

    Returns:
        Match object, or None if not found
    """
    if case_sensitive:
        return re.compile(re.escape(keyword)).search(text)
    return _compile(keyword).search(text)


def find_last(text: str, keyword: str, case_sensitive: bool = True) -> Optional[re.Match]:
    """
    Find the rightmost match of keyword (matches may overlap earlier ones)

    Args:
        text: Text to search
        keyword: Keyword (must not be empty)
        case_sensitive: Whether case-sensitive

    Returns:
        Match object, or None if not found
    """
    pattern = re.compile(re.escape(keyword)) if case_sensitive else _compile(keyword)
    for pos in range(len(text), -1, -1):
        match = pattern.match(text, pos)
        if match:
            return match
    return None


def splice(text: str, start: int, end: int, insert: str = "") -> str:
    """Replace text[start:end] with insert"""
    return text[:start] + insert + text[end:]


def replace_text(text: str, old: str, new: str, case_sensitive: bool = True) -> str:
    """
    Replace every non-overlapping occurrence of old, left to right

    Args:
        text: Original text
        old: String to replace
        new: Replacement string
        case_sensitive: Whether case-sensitive

    Returns:
        Replaced text
    """
    if not old:
        return text

    if case_sensitive:
        return text.replace(old, new)
    else:
        # Case-insensitive replacement, new is inserted literally
        return _compile(old).sub(lambda _m: new, text)


def replace_text_once(text: str, old: str, new: str, case_sensitive: bool = True,
                      last: bool = False) -> str:
    """
    Replace only the first (or last) matched string

    Args:
        text: Original text
        old: String to replace
        new: Replacement string
        case_sensitive: Whether case-sensitive
        last: Replace the rightmost match instead of the leftmost

    Returns:
        Replaced text
    """
    if not old:
        return text

    match = find_last(text, old, case_sensitive) if last else find_first(text, old, case_sensitive)
    if match is None:
        return text
    return splice(text, match.start(), match.end(), new)
