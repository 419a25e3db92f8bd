"""
op_parser.py - Operation Syntax for the Command Line

An operation is written as its kind followed by key=value settings:

    add text=_v2 at=index offset=3
    add counter=5 at=end
    remove text=a occurrence=last
    remove count=3 at=start
    replace text=final with=v2 ignore-case occurrence=all
"""

import shlex
from typing import Dict, List, Optional

from core import (
    AddOperation, RemoveOperation, ReplaceOperation, Operation,
    AddMode, RemoveMode, TextLocation, TextOccurrence,
)


class OperationSyntaxError(ValueError):
    """Operation text could not be parsed"""


OPERATION_HELP = __doc__.split("\n\n", 1)[1]

_ALLOWED_KEYS = {
    "add": {"text", "counter", "at", "offset"},
    "remove": {"text", "occurrence", "count", "at", "offset"},
    "replace": {"text", "with", "ignore-case", "occurrence"},
}

_FLAGS = {"ignore-case"}


def _split_settings(kind: str, tokens: List[str]) -> Dict[str, str]:
    settings: Dict[str, str] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        key = key.strip().lower()
        if not sep:
            if key not in _FLAGS:
                raise OperationSyntaxError(f"Expected key=value, got '{token}'")
            value = "true"
        if key not in _ALLOWED_KEYS[kind]:
            allowed = ", ".join(sorted(_ALLOWED_KEYS[kind]))
            raise OperationSyntaxError(f"Unknown setting '{key}' for {kind} (allowed: {allowed})")
        settings[key] = value
    return settings


def _int(settings: Dict[str, str], key: str, default: int = 0, min_val: Optional[int] = 0) -> int:
    if key not in settings:
        return default
    try:
        value = int(settings[key])
    except ValueError:
        raise OperationSyntaxError(f"{key} must be an integer, got '{settings[key]}'") from None
    if min_val is not None and value < min_val:
        raise OperationSyntaxError(f"{key} cannot be less than {min_val}")
    return value


def _bool(settings: Dict[str, str], key: str) -> bool:
    value = settings.get(key, "false").lower()
    if value in ("true", "yes", "1", "on"):
        return True
    if value in ("false", "no", "0", "off"):
        return False
    raise OperationSyntaxError(f"{key} must be true or false, got '{value}'")


def _enum(enum_cls, settings: Dict[str, str], key: str, default):
    if key not in settings:
        return default
    try:
        return enum_cls(settings[key].lower())
    except ValueError:
        choices = "/".join(m.value for m in enum_cls)
        raise OperationSyntaxError(f"{key} must be one of {choices}, got '{settings[key]}'") from None


def parse_operation(text: str) -> Operation:
    """
    Parse one operation

    Args:
        text: Operation text, e.g. "replace text=IMG with=photo"

    Returns:
        The operation

    Raises:
        OperationSyntaxError: text is not a valid operation
    """
    try:
        tokens = shlex.split(text)
    except ValueError as e:
        raise OperationSyntaxError(f"Cannot parse '{text}': {e}") from None

    if not tokens:
        raise OperationSyntaxError("Empty operation")

    kind = tokens[0].lower()
    if kind not in _ALLOWED_KEYS:
        raise OperationSyntaxError(f"Unknown operation '{tokens[0]}' (expected add, remove or replace)")

    settings = _split_settings(kind, tokens[1:])
    location = _enum(TextLocation, settings, "at", TextLocation.START)
    offset = _int(settings, "offset")

    if kind == "add":
        if "counter" in settings:
            if "text" in settings:
                raise OperationSyntaxError("add takes either text or counter, not both")
            return AddOperation(mode=AddMode.INCREMENTING_NUMBER,
                                increment_start=_int(settings, "counter", min_val=None),
                                location=location, offset=offset)
        return AddOperation(text=settings.get("text", ""), location=location, offset=offset)

    occurrence = _enum(TextOccurrence, settings, "occurrence", TextOccurrence.FIRST)

    if kind == "remove":
        if "count" in settings:
            if "text" in settings:
                raise OperationSyntaxError("remove takes either text or count, not both")
            return RemoveOperation(mode=RemoveMode.CHARACTER_COUNT, count=_int(settings, "count"),
                                   location=location, offset=offset)
        if "text" not in settings:
            raise OperationSyntaxError("remove needs text=... or count=...")
        return RemoveOperation(mode=RemoveMode.LITERAL_STRING, text=settings["text"],
                               occurrence=occurrence)

    if not settings.get("text"):
        raise OperationSyntaxError("replace needs a non-empty text=...")
    return ReplaceOperation(text=settings["text"], replacement=settings.get("with", ""),
                            ignore_case=_bool(settings, "ignore-case"), occurrence=occurrence)


def parse_operations(texts: List[str]) -> List[Operation]:
    """Parse operations in order"""
    return [parse_operation(t) for t in texts]
