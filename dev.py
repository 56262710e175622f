#!/usr/bin/env -S uv run python
"""Development task runner for animelo.

Usage:
    ./dev.py <command> [args...]

Quality Commands:
    fmt [target]    Format code (--check to verify only)
                    target: python, markdown, all (default: all)
    lint [target]   Lint code (--fix for python auto-fix)
                    target: python, markdown, all (default: all)
    typecheck       Run mypy
    test            Run pytest (pass additional args after)
    check           Run fmt --check, lint, and typecheck

Database Commands:
    db-migrate  Create or upgrade the rating store schema
    db-reset    Reset the rating store (warning: deletes all ratings)

Maintenance Commands:
    help        Show this help message
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent

TARGETS = ("python", "markdown", "all")


def run(cmd: list[str], check: bool = True) -> subprocess.CompletedProcess[bytes]:
    """Run a command, printing it first."""
    print(f"\n→ {' '.join(cmd)}")
    return subprocess.run(cmd, cwd=PROJECT_ROOT, check=check)


# =============================================================================
# Quality Commands
# =============================================================================


def cmd_fmt_python(check: bool = False) -> int:
    """Format Python code with ruff."""
    args = ["uv", "run", "ruff", "format"]
    if check:
        args.append("--check")
    args.append(".")
    return run(args, check=False).returncode


def cmd_fmt_markdown(check: bool = False) -> int:
    """Format Markdown files with rumdl."""
    args = ["uvx", "rumdl", "check", "."] if check else ["uvx", "rumdl", "fmt", "."]
    return run(args, check=False).returncode


def cmd_fmt(target: str = "all", check: bool = False) -> int:
    if target == "python":
        return cmd_fmt_python(check=check)
    if target == "markdown":
        return cmd_fmt_markdown(check=check)

    print("=== Formatting Python ===")
    python_rc = cmd_fmt_python(check=check)
    print("\n=== Formatting Markdown ===")
    markdown_rc = cmd_fmt_markdown(check=check)
    return 1 if python_rc or markdown_rc else 0


def cmd_lint_python(fix: bool = False) -> int:
    """Lint Python code with ruff."""
    args = ["uv", "run", "ruff", "check"]
    if fix:
        args.append("--fix")
    args.append(".")
    return run(args, check=False).returncode


def cmd_lint_markdown() -> int:
    """Lint Markdown files with rumdl."""
    result = run(["uvx", "rumdl", "check", "."], check=False)
    if result.returncode != 0:
        print("Run './dev.py fmt markdown' to auto-fix")
    return result.returncode


def cmd_lint(target: str = "all", fix: bool = False) -> int:
    if target == "python":
        return cmd_lint_python(fix=fix)
    if target == "markdown":
        return cmd_lint_markdown()

    print("=== Linting Python ===")
    python_rc = cmd_lint_python(fix=fix)
    print("\n=== Linting Markdown ===")
    markdown_rc = cmd_lint_markdown()
    return 1 if python_rc or markdown_rc else 0


def cmd_typecheck() -> int:
    """Run mypy in strict mode over src/."""
    print("\n=== Running mypy ===")
    return run(["uv", "run", "mypy", "src"], check=False).returncode


def cmd_test(args: list[str] | None = None) -> int:
    """Run pytest with optional arguments."""
    cmd = ["uv", "run", "pytest"]
    if args:
        cmd.extend(args)
    return run(cmd, check=False).returncode


def cmd_check() -> int:
    """Run all checks: fmt --check, lint, typecheck."""
    print("=== Checking Python format ===")
    py_fmt_rc = cmd_fmt_python(check=True)

    print("\n=== Checking Markdown format ===")
    md_fmt_rc = cmd_fmt_markdown(check=True)

    print("\n=== Linting Python ===")
    py_lint_rc = cmd_lint_python()

    print("\n=== Linting Markdown ===")
    md_lint_rc = cmd_lint_markdown()

    print("\n=== Checking types ===")
    type_rc = cmd_typecheck()

    if any([py_fmt_rc, md_fmt_rc, py_lint_rc, md_lint_rc, type_rc]):
        print("\n✗ Some checks failed")
        return 1

    print("\n✓ All checks passed")
    return 0


# =============================================================================
# Database Commands
# =============================================================================


def cmd_db_migrate() -> int:
    return run(["uv", "run", "python", "-m", "animelo.db.migrate"], check=False).returncode


def cmd_db_reset() -> int:
    """Reset the rating store (deletes every rating and fight count)."""
    print("⚠️  This will delete all ratings. Are you sure? [y/N] ", end="")
    confirm = input().strip().lower()
    if confirm != "y":
        print("Aborted.")
        return 1

    return run(["uv", "run", "python", "-m", "animelo.db.reset"], check=False).returncode


def cmd_help() -> int:
    """Show help message."""
    print(__doc__)
    return 0


# =============================================================================
# Main
# =============================================================================


def _target(args: list[str]) -> str:
    return next((arg for arg in args if arg in TARGETS), "all")


def main() -> int:
    if len(sys.argv) < 2:
        return cmd_help()

    command = sys.argv[1]
    args = sys.argv[2:]

    match command:
        # Quality commands
        case "fmt":
            return cmd_fmt(target=_target(args), check="--check" in args)
        case "lint":
            return cmd_lint(target=_target(args), fix="--fix" in args)
        case "typecheck":
            return cmd_typecheck()
        case "test":
            return cmd_test(args if args else None)
        case "check":
            return cmd_check()

        # Database commands
        case "db-migrate":
            return cmd_db_migrate()
        case "db-reset":
            return cmd_db_reset()

        # Help
        case "help" | "--help" | "-h":
            return cmd_help()
        case _:
            print(f"Unknown command: {command}")
            return cmd_help()


if __name__ == "__main__":
    sys.exit(main())
