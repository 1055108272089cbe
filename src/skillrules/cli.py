"""skillrules CLI - skill activation hooks for AI coding assistants."""

import logging
import sys
from pathlib import Path
from typing import Annotated, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skillrules import __version__
from skillrules.config import configure_logging, rules_path
from skillrules.errors import HookInputError, RuleSetInvalid

app = typer.Typer(
    name="skillrules",
    help="Suggest project skills to an AI coding assistant.",
    no_args_is_help=True,
)
hook_app = typer.Typer(help="Hook entry points (read JSON on stdin, always exit 0).")
rules_app = typer.Typer(help="Inspect a project's skill-rules.json.")
mcp_app = typer.Typer(help="MCP server.")

app.add_typer(hook_app, name="hook")
app.add_typer(rules_app, name="rules")
app.add_typer(mcp_app, name="mcp")

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

ProjectPath = Annotated[Path, typer.Option("--path", "-p", help="Project path")]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"skillrules {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Debug logging on stderr")
    ] = False,
) -> None:
    """skillrules - match prompts and edited files to project skills."""
    configure_logging(verbose)


# ── Hook commands ────────────────────────────────────────────────


def _run_hook(handler: Callable[[str], str]) -> None:
    # Hooks must never block the assistant: every failure ends in exit 0
    try:
        output = handler(sys.stdin.read())
    except RuleSetInvalid as e:
        err_console.print(f"[red]Skill rules invalid:[/red] {escape(str(e))}", highlight=False)
        return
    except HookInputError as e:
        logger.error("Skill hook input rejected: %s", e)
        return
    except Exception:
        logger.exception("Skill hook failed")
        return
    if output:
        typer.echo(output, nl=False)


@hook_app.command("prompt")
def hook_prompt() -> None:
    """Suggest skills for a submitted prompt."""
    from skillrules.hooks.run import prompt_hook

    _run_hook(prompt_hook)


@hook_app.command("files")
def hook_files() -> None:
    """Suggest skills and error-handling reminders for edited files."""
    from skillrules.hooks.run import files_hook

    _run_hook(files_hook)


@hook_app.command("lint")
def hook_lint() -> None:
    """Run lint commands for edited frontend/backend files."""
    from skillrules.hooks.run import lint_hook

    _run_hook(lint_hook)


# ── Matching ─────────────────────────────────────────────────────


@app.command("match")
def match(
    prompt: Annotated[str, typer.Argument(help="Prompt text to match")] = "",
    files: Annotated[
        Optional[list[str]], typer.Option("--file", "-f", help="Edited file path (repeatable)")
    ] = None,
    project_path: ProjectPath = Path("."),
) -> None:
    """Show which skills a prompt or a set of files would activate."""
    from skillrules.hooks.report import FILES_TITLE, format_activation_report
    from skillrules.rules import group_by_priority, load_rule_set, match_files, match_prompt

    project_path = project_path.resolve()
    try:
        rules = load_rule_set(rules_path(project_path))
    except RuleSetInvalid as e:
        console.print(f"[red]Skill rules invalid:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if files:
        report = format_activation_report(
            group_by_priority(match_files(files, rules, root=project_path)), title=FILES_TITLE
        )
    else:
        report = format_activation_report(group_by_priority(match_prompt(prompt, rules)))

    if not report:
        console.print("[dim]No skills matched.[/dim]")
        return
    console.print(report, markup=False, highlight=False, emoji=False, end="")


# ── Rules commands ───────────────────────────────────────────────


@rules_app.command("check")
def rules_check(project_path: ProjectPath = Path(".")) -> None:
    """Validate skill-rules.json and report patterns that will never match."""
    from skillrules.rules.loader import load_rule_set
    from skillrules.rules.patterns import InvalidPattern

    path = rules_path(project_path.resolve())
    if not path.exists():
        console.print(f"[yellow]No skill rules found at {escape(str(path))}[/yellow]")
        return

    try:
        rules = load_rule_set(path)
    except RuleSetInvalid as e:
        console.print(f"[red]Skill rules invalid:[/red] {escape(str(path))}")
        for problem in e.problems:
            console.print(f"  [red]✗[/red] {escape(problem)}")
        raise typer.Exit(1)

    if rules.is_empty:
        console.print(f"[yellow]{escape(str(path))} is unreadable or defines no skills.[/yellow]")
        return

    warnings = []
    for name, rule in rules.skills.items():
        compiled = []
        if rule.prompt_triggers:
            compiled += rule.prompt_triggers.compiled_intents
        if rule.file_triggers:
            compiled += rule.file_triggers.compiled_paths
            compiled += rule.file_triggers.compiled_exclusions
            compiled += rule.file_triggers.compiled_contents
        warnings += [
            f"{name}: invalid pattern {p.source!r} ({p.error})"
            for p in compiled
            if isinstance(p, InvalidPattern)
        ]

    for warning in warnings:
        console.print(f"  [yellow]⚠[/yellow] {escape(warning)}")
    console.print(f"[green]✓[/green] {len(rules.skills)} skill rules OK ({escape(str(path))})")


@rules_app.command("list")
def rules_list(project_path: ProjectPath = Path(".")) -> None:
    """List the configured skill rules in declaration order."""
    from skillrules.rules.loader import load_rule_set

    try:
        rules = load_rule_set(rules_path(project_path.resolve()))
    except RuleSetInvalid as e:
        console.print(f"[red]Skill rules invalid:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if rules.is_empty:
        console.print("[dim]No skill rules configured. Create some with:[/dim]")
        console.print("  skillrules init")
        return

    table = Table(title="Skill Rules")
    table.add_column("Name", style="green")
    table.add_column("Priority", style="cyan")
    table.add_column("Enforcement")
    table.add_column("Triggers")
    table.add_column("Description")

    for name, rule in rules.skills.items():
        triggers = []
        if rule.prompt_triggers:
            triggers.append("prompt")
        if rule.file_triggers:
            triggers.append("files")
        table.add_row(
            escape(name),
            rule.priority.value,
            rule.enforcement.value,
            ", ".join(triggers) or "-",
            escape(rule.description),
        )

    console.print(table)


# ── Init ─────────────────────────────────────────────────────────


@app.command("init")
def init(
    project_path: ProjectPath = Path("."),
    frontend: Annotated[str, typer.Option(help="Frontend directory")] = "frontend",
    backend: Annotated[str, typer.Option(help="Backend directory")] = "backend",
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing skill-rules.json")
    ] = False,
    hooks: Annotated[
        bool, typer.Option("--hooks/--no-hooks", help="Register hooks in .claude/settings.json")
    ] = True,
) -> None:
    """Scaffold starter skill rules and register the hooks."""
    from skillrules.installer import install_hooks
    from skillrules.scaffold import scaffold_project

    project_path = project_path.resolve()
    if not project_path.is_dir():
        console.print(f"[red]Error:[/red] {escape(str(project_path))} is not a directory")
        raise typer.Exit(1)

    results = scaffold_project(project_path, frontend, backend, force=force)
    for name, written in results.items():
        icon = "[green]✓[/green]" if written else "[dim]=[/dim]"
        console.print(f"  {icon} {name}")

    if hooks:
        added = install_hooks(project_path)
        for command in added:
            console.print(f"  [green]✓[/green] hook: {command}")
        if not added:
            console.print("[dim]Hooks already registered.[/dim]")


@app.command("uninstall")
def uninstall(project_path: ProjectPath = Path(".")) -> None:
    """Remove skillrules hooks from .claude/settings.json."""
    from skillrules.installer import remove_hooks

    if remove_hooks(project_path.resolve()):
        console.print("[green]Removed skillrules hooks.[/green]")
    else:
        console.print("[dim]No skillrules hooks registered.[/dim]")


# ── MCP commands ─────────────────────────────────────────────────


@mcp_app.command("serve")
def mcp_serve() -> None:
    """Start the MCP server (stdio transport)."""
    from skillrules.mcp.server import mcp

    mcp.run()
