"""Hook entry points: payload in, report text out.

Each function loads the project's rule set fresh for the invocation and
returns the text to print on stdout (empty when there is nothing to say).
RuleSetInvalid and HookInputError propagate to the caller.
"""

from pathlib import Path

from skillrules.config import rules_path
from skillrules.hooks.lint import check_edited_files, format_lint_report, lint_targets
from skillrules.hooks.payload import parse_payload
from skillrules.hooks.reminders import select_reminders
from skillrules.hooks.report import FILES_TITLE, format_activation_report
from skillrules.rules.loader import load_rule_set
from skillrules.rules.matcher import group_by_priority, match_files, match_prompt


def prompt_hook(raw: str) -> str:
    payload = parse_payload(raw)
    if not payload.prompt.strip():
        return ""
    rules = load_rule_set(rules_path(Path(payload.cwd)))
    return format_activation_report(group_by_priority(match_prompt(payload.prompt, rules)))


def files_hook(raw: str) -> str:
    """Skills triggered by edited files, followed by any error-handling reminders."""
    payload = parse_payload(raw)
    edited = payload.edited_files
    if not edited:
        return ""

    root = Path(payload.cwd)
    rules = load_rule_set(rules_path(root))
    sections = []
    report = format_activation_report(
        group_by_priority(match_files(edited, rules, root=root)), title=FILES_TITLE
    )
    if report:
        sections.append(report)
    sections += [reminder.render() + "\n" for reminder in select_reminders(edited)]
    return "\n".join(sections)


def lint_hook(raw: str) -> str:
    payload = parse_payload(raw)
    edited = payload.edited_files
    if not edited:
        return ""

    root = Path(payload.cwd)
    rules = load_rule_set(rules_path(root))
    results = check_edited_files(edited, root, lint_targets(rules.project_config))
    return format_lint_report(results)
