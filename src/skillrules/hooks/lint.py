"""Run project lint commands after files under a lint target are edited."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from skillrules.config import LINT_TIMEOUT
from skillrules.hooks.report import RULE
from skillrules.rules.matcher import relative_posix
from skillrules.rules.models import ProjectConfig

logger = logging.getLogger(__name__)

DEFAULT_FRONTEND_LINT = "pnpm lint"
DEFAULT_BACKEND_LINT = "python -m ruff check ."

# Linters that exit non-zero while still reporting a clean run
SUCCESS_MARKERS = ("All checks passed", "0 problems")


@dataclass(frozen=True)
class LintTarget:
    name: str
    path: str
    command: str

    def covers(self, rel_path: str) -> bool:
        base = self.path.strip("/")
        if base in ("", "."):
            return True
        return rel_path.startswith(f"{base}/") or f"/{base}/" in rel_path


@dataclass(frozen=True)
class LintResult:
    target: LintTarget
    ok: bool
    output: str = ""


def lint_targets(project: ProjectConfig | None) -> list[LintTarget]:
    """Frontend and backend targets, from projectConfig when present."""
    project = project or ProjectConfig()
    return [
        LintTarget(
            name="Frontend",
            path=project.frontend_path,
            command=project.frontend_lint_command or DEFAULT_FRONTEND_LINT,
        ),
        LintTarget(
            name="Backend",
            path=project.backend_path,
            command=project.backend_lint_command or DEFAULT_BACKEND_LINT,
        ),
    ]


def run_lint(target: LintTarget, root: Path) -> LintResult:
    workdir = root / target.path
    logger.debug("Running %r in %s", target.command, workdir)
    try:
        result = subprocess.run(
            target.command,
            shell=True,
            cwd=workdir,
            capture_output=True,
            text=True,
            timeout=LINT_TIMEOUT,
        )
    except FileNotFoundError as e:
        return LintResult(target, ok=False, output=f"could not run {target.command!r}: {e}")
    except subprocess.TimeoutExpired:
        return LintResult(
            target, ok=False, output=f"{target.command!r} timed out after {LINT_TIMEOUT}s"
        )

    output = result.stdout or result.stderr or ""
    if result.returncode == 0 or any(marker in output for marker in SUCCESS_MARKERS):
        return LintResult(target, ok=True, output=output)
    return LintResult(target, ok=False, output=output)


def check_edited_files(
    edited_files: Iterable[str], root: Path, targets: Iterable[LintTarget]
) -> list[LintResult]:
    """Run each target's lint command once if any edited file lies under it."""
    rel_paths = [relative_posix(f, root) for f in edited_files if f]
    results = []
    for target in targets:
        if any(target.covers(p) for p in rel_paths):
            results.append(run_lint(target, root))
    return results


def format_lint_report(results: list[LintResult]) -> str:
    """Progress lines for each run, then a banner of failures if any."""
    if not results:
        return ""
    lines = []
    for result in results:
        lines.append(f"🔍 Checking {result.target.name} files...")
        if result.ok:
            lines.append(f"✅ {result.target.name}: No lint errors")

    failures = [r for r in results if not r.ok]
    if failures:
        lines += ["", RULE, "⚠️  BUILD/LINT ERRORS DETECTED", RULE, ""]
        for failure in failures:
            lines.append(f"{failure.target.name} lint errors:")
            lines.append(failure.output.rstrip())
            lines.append("")
        lines.append("Please fix these errors before continuing.")
        lines.append(RULE)
    return "\n".join(lines) + "\n"
