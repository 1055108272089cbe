"""Tests for hook payloads, reports, reminders and the lint checker."""

import json
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest

from skillrules.errors import HookInputError, RuleSetInvalid
from skillrules.hooks.lint import (
    LintResult,
    LintTarget,
    check_edited_files,
    format_lint_report,
    lint_targets,
    run_lint,
)
from skillrules.hooks.payload import parse_payload
from skillrules.hooks.reminders import select_reminders
from skillrules.hooks.report import ACTION_LINE, format_activation_report
from skillrules.hooks.run import files_hook, lint_hook, prompt_hook
from skillrules.rules.matcher import group_by_priority, match_prompt
from skillrules.rules.models import ProjectConfig


class TestPayload:
    def test_prompt_payload(self):
        payload = parse_payload(json.dumps({"cwd": "/proj", "prompt": "hi", "extra": 1}))
        assert payload.cwd == "/proj"
        assert payload.prompt == "hi"
        assert payload.edited_files == []

    def test_tool_uses(self):
        payload = parse_payload(
            json.dumps(
                {
                    "cwd": "/proj",
                    "tool_uses": [
                        {"tool": "Edit", "parameters": {"file_path": "/proj/a.py"}},
                        {"tool": "Read", "parameters": {"file_path": "/proj/b.py"}},
                        {"tool": "Write", "parameters": {}},
                        {"tool": "Write", "parameters": {"file_path": "/proj/c.py"}},
                    ],
                }
            )
        )
        assert payload.edited_files == ["/proj/a.py", "/proj/c.py"]

    def test_single_tool_shape(self):
        payload = parse_payload(
            json.dumps(
                {"cwd": "/proj", "tool_name": "MultiEdit", "tool_input": {"file_path": "x.ts"}}
            )
        )
        assert payload.edited_files == ["x.ts"]

    def test_not_json(self):
        with pytest.raises(HookInputError):
            parse_payload("prompt: hello")

    def test_missing_cwd(self):
        with pytest.raises(HookInputError):
            parse_payload(json.dumps({"prompt": "hello"}))


class TestReport:
    def test_empty(self):
        assert format_activation_report(group_by_priority([])) == ""

    def test_grouped_headings(self, sample_rules):
        groups = group_by_priority(match_prompt("auth endpoint component", sample_rules))
        report = format_activation_report(groups)
        lines = report.splitlines()

        assert "SKILL ACTIVATION CHECK" in lines[1]
        critical = lines.index("🚨 CRITICAL SKILLS:")
        high = lines.index("📚 RECOMMENDED SKILLS:")
        medium = lines.index("📖 SUGGESTED SKILLS:")
        assert critical < high < medium
        assert "💡 OPTIONAL SKILLS:" not in lines
        assert lines[high + 1] == "  → backend-dev-guidelines"
        assert lines[medium + 1] == "  → frontend-dev-guidelines"
        assert ACTION_LINE in lines

    def test_block_enforcement_framing(self, sample_rules):
        groups = group_by_priority(match_prompt("reset my password", sample_rules))
        report = format_activation_report(groups)
        assert "  → security-review [block]" in report
        assert "Read the security skill before touching auth code." in report


class TestReminders:
    def test_python_backend(self):
        reminders = select_reminders(["/proj/backend/api/users.py"])
        assert [r.name for r in reminders] == ["Python"]
        assert "ERROR HANDLING SELF-CHECK (Python)" in reminders[0].render()

    def test_each_reminder_once(self):
        reminders = select_reminders(
            ["backend/a.py", "backend/b.py", "frontend/src/App.tsx", "server/index.ts"]
        )
        assert [r.name for r in reminders] == ["Python", "Node.js", "React"]

    def test_node_reminder_text(self):
        (reminder,) = select_reminders(["server/routes/users.ts"])
        text = reminder.render()
        assert "   ❓ Are async errors handled correctly?" in text
        assert "      - Include stack traces in development" in text

    def test_unrelated_files(self):
        assert select_reminders(["README.md", "scripts/tool.py"]) == []


class TestLint:
    def test_targets_from_project_config(self):
        targets = lint_targets(
            ProjectConfig(frontendPath="web", backendLintCommand="ruff check .")
        )
        assert targets[0] == LintTarget("Frontend", "web", "pnpm lint")
        assert targets[1] == LintTarget("Backend", "backend", "ruff check .")

    def test_default_targets(self):
        assert [t.command for t in lint_targets(None)] == ["pnpm lint", "python -m ruff check ."]

    def test_covers(self):
        target = LintTarget("Backend", "backend", "ruff check .")
        assert target.covers("backend/api/users.py")
        assert target.covers("repo/backend/users.py")
        assert not target.covers("backend_old/users.py")
        assert LintTarget("All", ".", "make lint").covers("anything.py")

    @patch("skillrules.hooks.lint.subprocess.run")
    def test_runs_matching_target_once(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        targets = lint_targets(None)
        results = check_edited_files(
            [str(tmp_path / "backend" / "a.py"), "backend/b.py"], tmp_path, targets
        )
        assert [r.target.name for r in results] == ["Backend"]
        assert results[0].ok
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == "python -m ruff check ."
        assert kwargs["shell"] is True
        assert kwargs["cwd"] == tmp_path / "backend"

    @patch("skillrules.hooks.lint.subprocess.run")
    def test_failure_reported(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=1, stdout="E501 line too long", stderr="")
        results = check_edited_files(["backend/a.py"], tmp_path, lint_targets(None))
        report = format_lint_report(results)
        assert "BUILD/LINT ERRORS DETECTED" in report
        assert "Backend lint errors:" in report
        assert "E501 line too long" in report

    @patch("skillrules.hooks.lint.subprocess.run")
    def test_success_marker_despite_exit_code(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=1, stdout="All checks passed!", stderr="")
        results = check_edited_files(["backend/a.py"], tmp_path, lint_targets(None))
        assert results[0].ok
        report = format_lint_report(results)
        assert "BUILD/LINT ERRORS" not in report
        assert "✅ Backend: No lint errors" in report

    @patch("skillrules.hooks.lint.subprocess.run")
    def test_missing_tool(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("pnpm")
        results = check_edited_files(["frontend/App.tsx"], tmp_path, lint_targets(None))
        assert not results[0].ok
        assert "could not run" in results[0].output

    @patch("skillrules.hooks.lint.subprocess.run")
    def test_timeout(self, mock_run, tmp_path):
        mock_run.side_effect = subprocess.TimeoutExpired("pnpm lint", 120)
        results = check_edited_files(["frontend/App.tsx"], tmp_path, lint_targets(None))
        assert "timed out" in results[0].output

    def test_progress_lines(self):
        results = [
            LintResult(LintTarget("Frontend", "frontend", "pnpm lint"), ok=False, output="1 error"),
            LintResult(LintTarget("Backend", "backend", "ruff check ."), ok=True),
        ]
        report = format_lint_report(results)
        assert report.startswith("🔍 Checking Frontend files...\n🔍 Checking Backend files...\n")
        assert "✅ Backend: No lint errors" in report
        assert "✅ Frontend" not in report
        assert "Frontend lint errors:\n1 error" in report

    def test_nothing_checked(self):
        assert format_lint_report([]) == ""

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell syntax")
    def test_compound_command_runs_in_shell(self, tmp_path):
        (tmp_path / "backend").mkdir()
        failing = run_lint(LintTarget("Backend", "backend", "true && echo broken && false"), tmp_path)
        assert not failing.ok
        assert "broken" in failing.output

        passing = run_lint(LintTarget("Backend", "backend", "test -d . && echo clean"), tmp_path)
        assert passing.ok


class TestRunHooks:
    def test_prompt_hook_matches(self, project):
        root = project()
        output = prompt_hook(json.dumps({"cwd": str(root), "prompt": "Add an Endpoint"}))
        assert "→ backend-dev-guidelines" in output

    def test_prompt_hook_no_match_is_silent(self, project):
        root = project()
        assert prompt_hook(json.dumps({"cwd": str(root), "prompt": "hello there"})) == ""

    def test_prompt_hook_without_config(self, tmp_path):
        assert prompt_hook(json.dumps({"cwd": str(tmp_path), "prompt": "add endpoint"})) == ""

    def test_prompt_hook_invalid_config(self, project):
        root = project({"skills": {"api": {"enforcement": "suggest", "priority": "asap"}}})
        with pytest.raises(RuleSetInvalid):
            prompt_hook(json.dumps({"cwd": str(root), "prompt": "anything"}))

    def test_files_hook(self, project):
        root = project()
        payload = {
            "cwd": str(root),
            "tool_uses": [
                {"tool": "Edit", "parameters": {"file_path": str(root / "backend/api/users.py")}}
            ],
        }
        output = files_hook(json.dumps(payload))
        assert "SKILLS FOR EDITED FILES" in output
        assert "→ backend-dev-guidelines" in output
        assert "ERROR HANDLING SELF-CHECK (Python)" in output

    def test_files_hook_nothing_edited(self, project):
        root = project()
        assert files_hook(json.dumps({"cwd": str(root), "tool_uses": []})) == ""

    @patch("skillrules.hooks.lint.subprocess.run")
    def test_lint_hook(self, mock_run, project):
        mock_run.return_value = MagicMock(returncode=2, stdout="", stderr="3 problems")
        root = project()
        payload = {"cwd": str(root), "tool_name": "Write", "tool_input": {"file_path": "frontend/App.tsx"}}
        output = lint_hook(json.dumps(payload))
        assert "Frontend lint errors:" in output
        assert "3 problems" in output
