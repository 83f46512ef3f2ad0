"""
traversal-fixer - interactive scanner and fixer for unsafe file access

Usage:
    traversal-fixer                    # prompt for a file, ask before each fix
    traversal-fixer main.go            # scan main.go
    traversal-fixer main.go --yes      # apply every fix without asking
    traversal-fixer main.go --copy     # write main_fixed.go instead of overwriting
    traversal-fixer main.go --dry-run  # report only, never write
"""

import logging
import os
import sys
from typing import Optional

import click
from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.text import Text

from traversal_fixer import __version__
from traversal_fixer.config import Settings, load_settings
from traversal_fixer.environment import detect_language_versions, detect_os
from traversal_fixer.fixer import format_report, replace_vulnerabilities, write_source
from traversal_fixer.models import FixOutcome, ReplacementRule
from traversal_fixer.scanner import format_warning, read_source, scan_code

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True, highlight=False)

# Colour scheme: vulnerabilities and errors, warnings, fixes and clean results, info
RED = "red"
YELLOW = "yellow"
GREEN = "bright_green"
BLUE = "blue"


def print_environment(settings: Settings) -> None:
    """Print the operating system and the installed language versions."""
    console.print("Detecting OS...", style=BLUE)
    console.print(Text.assemble(("Operating System:", BLUE), " ", detect_os()))

    console.print("\nDetecting Installed Programming Language Versions...", style=BLUE)
    for language, version in detect_language_versions(settings.probe_timeout).items():
        console.print(Text.assemble((f"{language}:", BLUE), " ", version))


def print_findings(code: str) -> None:
    console.print("\nScanning for vulnerabilities...", style=BLUE)
    findings = scan_code(code)
    if not findings:
        console.print("No vulnerabilities found.", style=GREEN)
        return
    for finding in findings:
        warning = format_warning(finding)
        console.print(Text.assemble(("[WARNING]", YELLOW), warning[len("[WARNING]"):]))


def ask_to_replace(rule: ReplacementRule, line_num: int) -> bool:
    """Show one detected pattern and ask whether to replace it."""
    console.print(
        Text.assemble(
            "\n ",
            ("[DETECTED]", RED),
            " Vulnerable pattern found: ",
            (f"`{rule.pattern}`", RED),
        )
    )
    console.print(Text.assemble(("Location:", BLUE), f" Line {line_num}"))
    console.print(Text.assemble(("Suggested Fix:", BLUE), " Replace with a safer version"))
    return Confirm.ask(
        Text("\n Do you want to replace it?", style=BLUE),
        console=console,
        default=False,
    )


def print_report(outcome: FixOutcome) -> None:
    console.print("\n Replacement Report:", style=BLUE)
    for line in format_report(outcome):
        if line.startswith("Replacement "):
            console.print(f" {line}", style=BLUE, markup=False)
        elif line.startswith("  Before"):
            console.print(f" {line}", style=RED, markup=False)
        elif line.startswith("  After"):
            console.print(f" {line}", style=GREEN, markup=False)
        else:
            console.print(line, style=GREEN, markup=False)


def run(
    path: Optional[str],
    assume_yes: bool,
    dry_run: bool,
    copy: bool,
    backup: bool,
    skip_env: bool,
    settings: Settings,
) -> int:
    """Run the read/scan/fix/write pipeline. Returns the exit code."""
    if not skip_env:
        print_environment(settings)

    if not path:
        path = Prompt.ask(Text("\n Enter the path of the file to scan", style=BLUE), console=console)
    path = path.strip()

    console.print(Text.assemble("\n ", ("Reading file:", BLUE), f" {path}"))
    code, error = read_source(path)
    if error:
        console.print(Text.assemble(("Error reading file:", RED), f" {error}"))
        return 1

    print_findings(code)

    console.print("\n Replacing vulnerabilities...", style=BLUE)
    confirm = (lambda rule, line_num: True) if assume_yes else ask_to_replace
    outcome = replace_vulnerabilities(code, confirm)
    print_report(outcome)

    if dry_run:
        console.print("\n Dry run: no files were written.", style=YELLOW)
        return 0

    result = write_source(
        path,
        outcome.code,
        mode="copy" if copy else "in_place",
        backup=backup,
        suffix=settings.fixed_suffix,
    )
    if not result.success:
        console.print(Text.assemble(("Error saving file:", RED), f" {result.message}"))
        return 1

    if result.backup_path:
        console.print(Text.assemble(("\n Original backed up to:", BLUE), f" {result.backup_path}"))
    console.print(Text.assemble("\n ", ("File has been updated at:", GREEN), f" {result.path}"))
    return 0


@click.command()
@click.version_option(version=__version__, prog_name="traversal-fixer")
@click.argument("path", required=False)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Apply every fix without asking")
@click.option("--dry-run", is_flag=True, help="Scan and report without writing any file")
@click.option("--copy", is_flag=True, help="Write <name>_fixed<ext> instead of overwriting the file")
@click.option("--backup", is_flag=True, help="Back up the original before overwriting it")
@click.option("--skip-env", is_flag=True, help="Skip OS and language version detection")
def main(
    path: Optional[str],
    assume_yes: bool,
    dry_run: bool,
    copy: bool,
    backup: bool,
    skip_env: bool,
) -> None:
    """Find and fix unsafe file access patterns in a source file.

    Detects os.ReadFile(filePath) calls and '../' or '..\\' path segments,
    asks before replacing each one with a safer version, then writes the
    result back.
    """
    try:
        settings = load_settings(os.environ)
    except ValueError as e:
        console.print(Text.assemble(("Configuration error:", RED), f" {e}"))
        sys.exit(1)

    logging.basicConfig(level=settings.log_level_value)
    logger.debug(f"Settings: {settings!r}")
    sys.exit(run(path, assume_yes, dry_run, copy, backup, skip_env, settings))


if __name__ == "__main__":
    main()
