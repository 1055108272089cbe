"""Match prompts and edited files against a loaded RuleSet.

Matching is pure: the RuleSet is never modified and nothing is kept
between calls, so one loaded RuleSet can serve any number of queries.
Results come back in rule declaration order and are grouped afterwards.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Iterator

from skillrules.rules.models import (
    Enforcement,
    FileTriggers,
    Priority,
    PromptTriggers,
    RuleSet,
    SkillRule,
)
from skillrules.rules.patterns import any_fullmatch, any_search

logger = logging.getLogger(__name__)

ContentReader = Callable[[str], str | None]


class TriggerKind(str, Enum):
    KEYWORD = "keyword"
    INTENT = "intent"
    PATH = "path"
    CONTENT = "content"


@dataclass(frozen=True)
class SkillMatch:
    """A skill whose triggers fired for a query."""

    name: str
    rule: SkillRule
    trigger: TriggerKind

    @property
    def priority(self) -> Priority:
        return self.rule.priority

    @property
    def enforcement(self) -> Enforcement:
        return self.rule.enforcement


@dataclass(frozen=True)
class PriorityGroups:
    """Matches partitioned into the four fixed priority buckets."""

    critical: tuple[SkillMatch, ...] = ()
    high: tuple[SkillMatch, ...] = ()
    medium: tuple[SkillMatch, ...] = ()
    low: tuple[SkillMatch, ...] = ()

    def __iter__(self) -> Iterator[tuple[Priority, tuple[SkillMatch, ...]]]:
        for priority in Priority:
            yield priority, getattr(self, priority.value)

    def __bool__(self) -> bool:
        return any(bucket for _, bucket in self)

    def names(self) -> dict[str, list[str]]:
        return {priority.value: [m.name for m in bucket] for priority, bucket in self}


def _prompt_trigger(
    prompt: str, prompt_lower: str, triggers: PromptTriggers
) -> TriggerKind | None:
    # A keyword hit skips intent pattern evaluation entirely
    if any(kw in prompt_lower for kw in triggers.active_keywords):
        return TriggerKind.KEYWORD
    if any_search(triggers.compiled_intents, prompt):
        return TriggerKind.INTENT
    return None


def match_prompt(prompt: str, rules: RuleSet) -> list[SkillMatch]:
    """Return the skills whose prompt triggers fire, in declaration order."""
    prompt_lower = prompt.lower()
    matches = []
    for name, rule in rules.skills.items():
        if name.startswith("_") or rule.prompt_triggers is None:
            continue
        trigger = _prompt_trigger(prompt, prompt_lower, rule.prompt_triggers)
        if trigger:
            logger.debug("Skill %s matched prompt by %s", name, trigger.value)
            matches.append(SkillMatch(name=name, rule=rule, trigger=trigger))
    return matches


def relative_posix(path: str, root: Path | None) -> str:
    candidate = Path(path.replace("\\", "/"))
    if root is not None and candidate.is_absolute():
        try:
            candidate = candidate.relative_to(root)
        except ValueError:
            pass
    return candidate.as_posix()


def file_reader(root: Path | None) -> ContentReader:
    """Build a reader that returns file text, or None when unreadable."""

    def read(path: str) -> str | None:
        target = Path(path)
        if root is not None and not target.is_absolute():
            target = root / target
        try:
            return target.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            return None

    return read


def _file_trigger(
    rel_path: str,
    content: Callable[[], str | None],
    rule: SkillRule,
    triggers: FileTriggers,
) -> TriggerKind | None:
    if any_fullmatch(triggers.compiled_exclusions, rel_path):
        return None

    path_hit = any_fullmatch(triggers.compiled_paths, rel_path)
    if not path_hit and not triggers.content_patterns:
        return None

    markers = rule.skip_conditions.file_markers
    text = content() if (triggers.content_patterns or markers) else None
    if text is not None and any(marker in text for marker in markers):
        return None

    if path_hit:
        return TriggerKind.PATH
    if text is not None and any_search(triggers.compiled_contents, text):
        return TriggerKind.CONTENT
    return None


def match_files(
    file_paths: Iterable[str],
    rules: RuleSet,
    root: Path | None = None,
    read_content: ContentReader | None = None,
) -> list[SkillMatch]:
    """Return the skills whose file triggers fire for any of the paths.

    Paths under ``root`` are matched relative to it. File content is only
    read for rules that declare content patterns or skip markers, at most
    once per file. Each skill appears at most once.
    """
    paths = list(dict.fromkeys(p for p in file_paths if p))
    reader = read_content or (file_reader(root) if root is not None else (lambda _p: None))

    cache: dict[str, str | None] = {}

    def content_of(path: str) -> Callable[[], str | None]:
        def load() -> str | None:
            if path not in cache:
                cache[path] = reader(path)
            return cache[path]

        return load

    matches = []
    for name, rule in rules.skills.items():
        if name.startswith("_") or rule.file_triggers is None:
            continue
        for path in paths:
            rel_path = relative_posix(path, root)
            trigger = _file_trigger(rel_path, content_of(path), rule, rule.file_triggers)
            if trigger:
                logger.debug("Skill %s matched %s by %s", name, rel_path, trigger.value)
                matches.append(SkillMatch(name=name, rule=rule, trigger=trigger))
                break
    return matches


def group_by_priority(matches: Iterable[SkillMatch]) -> PriorityGroups:
    """Partition matches into priority buckets, keeping relative order."""
    buckets: dict[Priority, list[SkillMatch]] = {p: [] for p in Priority}
    for match in matches:
        buckets[match.priority].append(match)
    return PriorityGroups(**{p.value: tuple(b) for p, b in buckets.items()})
