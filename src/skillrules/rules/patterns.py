"""Compile regex and glob trigger patterns into tagged outcomes.

Patterns come from a static configuration file, so a bad one must not take
the whole rule set down. Each source string compiles exactly once into
either a ValidPattern or an InvalidPattern, and the matcher only ever
consults the valid ones.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidPattern:
    """A pattern that compiled."""

    source: str
    regex: re.Pattern[str]


@dataclass(frozen=True)
class InvalidPattern:
    """A pattern that failed to compile; it never matches."""

    source: str
    error: str


CompiledPattern = ValidPattern | InvalidPattern


def compile_pattern(source: str, flags: int = 0) -> CompiledPattern:
    """Compile a regular expression, capturing failure instead of raising."""
    try:
        return ValidPattern(source=source, regex=re.compile(source, flags))
    except re.error as e:
        logger.debug("Skipping invalid pattern %r: %s", source, e)
        return InvalidPattern(source=source, error=str(e))


def compile_patterns(sources: Iterable[str], flags: int = 0) -> tuple[CompiledPattern, ...]:
    return tuple(compile_pattern(s, flags) for s in sources)


def glob_to_regex(pattern: str) -> str:
    """Translate a path glob into a regular expression for full matching.

    ``**/`` spans zero or more whole directories, a bare ``**`` spans
    anything, ``*`` and ``?`` stay within one path segment and ``[...]`` is
    a character class (``[!...]`` negated). ``{a,b}`` matches any of its
    comma-separated alternatives.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if i < n and pattern[i] == "/":
                    out.append("(?:.*/)?")
                    i += 1
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = pattern[i + 1 : end].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append(f"[{body}]")
                i = end + 1
                continue
        elif c == "{":
            end = pattern.find("}", i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                options = pattern[i + 1 : end].split(",")
                out.append("(?:" + "|".join(glob_to_regex(o) for o in options) + ")")
                i = end + 1
                continue
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


def compile_glob(pattern: str) -> CompiledPattern:
    """Compile a path glob. Use ``regex.fullmatch`` on the result."""
    try:
        regex = re.compile(glob_to_regex(pattern.replace("\\", "/")), re.DOTALL)
    except re.error as e:
        logger.debug("Skipping invalid glob %r: %s", pattern, e)
        return InvalidPattern(source=pattern, error=str(e))
    return ValidPattern(source=pattern, regex=regex)


def compile_globs(patterns: Iterable[str]) -> tuple[CompiledPattern, ...]:
    return tuple(compile_glob(p) for p in patterns)


def any_search(patterns: Iterable[CompiledPattern], text: str) -> bool:
    """True if any valid pattern finds a match anywhere in text."""
    return any(
        isinstance(p, ValidPattern) and p.regex.search(text) is not None
        for p in patterns
    )


def any_fullmatch(patterns: Iterable[CompiledPattern], text: str) -> bool:
    """True if any valid pattern matches the whole of text."""
    return any(
        isinstance(p, ValidPattern) and p.regex.fullmatch(text) is not None
        for p in patterns
    )
