"""Plain-text reports printed back to the assistant by hooks."""

from skillrules.rules.matcher import PriorityGroups
from skillrules.rules.models import Enforcement, Priority

RULE = "━" * 39

PRIORITY_HEADINGS = {
    Priority.CRITICAL: "🚨 CRITICAL SKILLS:",
    Priority.HIGH: "📚 RECOMMENDED SKILLS:",
    Priority.MEDIUM: "📖 SUGGESTED SKILLS:",
    Priority.LOW: "💡 OPTIONAL SKILLS:",
}

PROMPT_TITLE = "🎯 SKILL ACTIVATION CHECK"
FILES_TITLE = "🎯 SKILLS FOR EDITED FILES"
ACTION_LINE = "ACTION: Use Skill tool BEFORE responding"


def banner(title: str) -> list[str]:
    return [RULE, title, RULE, ""]


def format_activation_report(groups: PriorityGroups, title: str = PROMPT_TITLE) -> str:
    """Render grouped matches; an empty string when nothing matched."""
    if not groups:
        return ""

    lines = banner(title)
    for priority, bucket in groups:
        if not bucket:
            continue
        lines.append(PRIORITY_HEADINGS[priority])
        for match in bucket:
            line = f"  → {match.name}"
            if match.enforcement is not Enforcement.SUGGEST:
                line += f" [{match.enforcement.value}]"
            lines.append(line)
            if match.enforcement is Enforcement.BLOCK and match.rule.block_message:
                lines.append(f"    {match.rule.block_message}")
        lines.append("")

    lines.append(ACTION_LINE)
    lines.append(RULE)
    return "\n".join(lines) + "\n"
