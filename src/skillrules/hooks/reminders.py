"""Error-handling reminders shown after backend or frontend edits."""

from dataclasses import dataclass
from typing import Callable, Iterable

from skillrules.hooks.report import RULE


@dataclass(frozen=True)
class Reminder:
    name: str
    matches: Callable[[str], bool]
    checks: tuple[str, ...]
    practices: tuple[str, ...]
    scope: str = "Backend"

    def render(self) -> str:
        lines = [
            RULE,
            f"📋 ERROR HANDLING SELF-CHECK ({self.name})",
            RULE,
            "",
            f"⚠️  {self.scope} Changes Detected",
            "",
        ]
        lines += [f"   ❓ {check}" for check in self.checks]
        lines += ["", "   💡 Best Practices:"]
        lines += [f"      - {practice}" for practice in self.practices]
        lines.append(RULE)
        return "\n".join(lines)


def _under(path: str, *dirs: str) -> bool:
    return any(f"{d}/" in path for d in dirs)


DEFAULT_REMINDERS: tuple[Reminder, ...] = (
    Reminder(
        name="Python",
        matches=lambda p: p.endswith(".py") and _under(p, "backend", "api", "server"),
        checks=(
            "Did you add proper try-except blocks?",
            "Are exceptions logged with logger.error()?",
            "Are errors captured in your monitoring tool?",
            "Are appropriate HTTP exceptions raised?",
        ),
        practices=(
            "Use try-except for all I/O operations",
            "Log errors with exc_info=True",
            "Capture unexpected exceptions in Sentry/Datadog",
        ),
    ),
    Reminder(
        name="Node.js",
        matches=lambda p: p.endswith((".ts", ".js")) and _under(p, "server", "api", "backend"),
        checks=(
            "Did you add proper try-catch blocks?",
            "Are errors logged with proper context?",
            "Are async errors handled correctly?",
            "Are appropriate HTTP status codes returned?",
        ),
        practices=(
            "Wrap async operations in try-catch",
            "Use error middleware for Express/Fastify",
            "Include stack traces in development",
            "Use structured logging (Winston, Pino)",
        ),
    ),
    Reminder(
        name="React",
        matches=lambda p: p.endswith((".tsx", ".jsx")) and _under(p, "frontend", "src", "app"),
        checks=(
            "Did you add error boundaries where needed?",
            "Are API errors handled gracefully?",
            "Are loading/error states displayed to users?",
        ),
        practices=(
            "Use ErrorBoundary for component errors",
            "Show user-friendly error messages",
            "Log errors to monitoring service",
        ),
        scope="Frontend",
    ),
)


def select_reminders(
    edited_files: Iterable[str], reminders: Iterable[Reminder] = DEFAULT_REMINDERS
) -> list[Reminder]:
    """Reminders whose predicate matches any edited file, each at most once."""
    files = [f.replace("\\", "/") for f in edited_files]
    return [r for r in reminders if any(r.matches(f) for f in files)]
