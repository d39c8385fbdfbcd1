"""Diagnostic tool for verifying the semantic-markdown installation."""

import sys
from importlib import import_module
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .conversion.parser import is_parser_available


def check_dependency(
    module_name: str, package_name: Optional[str] = None, optional: bool = False
) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)
        optional: Whether this is an optional dependency

    Returns:
        Tuple of (success: bool, message: str)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        if optional:
            return False, f"[WARN] {display_name} (optional - not installed)"
        return False, f"[MISSING] {display_name}"


def check_parser(features: str, optional: bool = True) -> tuple[bool, str]:
    """
    Check whether BeautifulSoup can build trees with ``features``.

    Returns:
        Tuple of (success: bool, message: str)
    """
    if is_parser_available(features):
        return True, f"[OK] parser {features}"
    if optional:
        return False, f"[WARN] parser {features} (optional - not installed)"
    return False, f"[MISSING] parser {features}"


def run_doctor(console: Optional[Console] = None) -> int:
    """
    Run diagnostic checks and display results.

    Args:
        console: Console to print to (defaults to a new stdout console)

    Returns:
        Exit code (0 if all core dependencies OK, 1 otherwise)
    """
    console = console or Console()
    console.print("Running semantic-markdown diagnostics...\n")

    core_checks = [
        ("bs4", "beautifulsoup4"),
        ("pydantic", "pydantic"),
        ("rich", "rich"),
    ]
    optional_checks = [
        ("yaml", "pyyaml", True),
    ]

    core_results = [check_dependency(mod, pkg) for mod, pkg in core_checks]
    optional_results = [check_dependency(mod, pkg, opt) for mod, pkg, opt in optional_checks]
    parser_results = [
        check_parser("html.parser", optional=False),
        check_parser("lxml"),
        check_parser("html5lib"),
    ]

    all_checks = {
        "Core Dependencies": core_results,
        "Optional Dependencies": optional_results,
        "HTML Parsers": parser_results,
    }

    for category, results in all_checks.items():
        table = Table(title=category, show_header=False, box=None)
        table.add_column("Status", style="bold")

        for success, message in results:
            style = "green" if success else ("yellow" if "optional" in message else "red")
            table.add_row(escape(message), style=style)

        console.print(table)
        console.print()

    core_failed = any(not success for success, _ in core_results + parser_results[:1])

    if core_failed:
        console.print("\n[red]WARNING: Some core dependencies are missing![/red]")
        console.print("\nRecommended fixes:")
        console.print("  1. For pip users: pip install --upgrade --force-reinstall semantic-markdown")
        console.print(escape("  2. For development: pip install -e .[dev]"))
        return 1

    console.print("\nAll core dependencies installed correctly!")

    optional_missing = [msg for success, msg in optional_results + parser_results if not success]
    if optional_missing:
        console.print("\nOptional features available:")
        console.print(escape("  - YAML config support: pip install semantic-markdown[yaml]"))
        console.print(escape("  - Faster parsing: pip install semantic-markdown[lxml]"))
        console.print(escape("  - Browser-grade parsing: pip install semantic-markdown[html5lib]"))

    return 0


if __name__ == "__main__":
    sys.exit(run_doctor())
