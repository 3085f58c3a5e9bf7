"""Console output helpers for deploykit."""

from typing import Any, Callable, Dict, List, Mapping, Tuple, Union

# ANSI color codes
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
BLUE = "\033[34m"
CYAN = "\033[36m"


def print_banner() -> None:
    """Print the deploykit banner."""
    banner = r"""     _            _             _    _ _
  __| | ___ _ __ | | ___  _   _| | _(_) |_
 / _` |/ _ \ '_ \| |/ _ \| | | | |/ / | __|
| (_| |  __/ |_) | | (_) | |_| |   <| | |_
 \__,_|\___| .__/|_|\___/ \__, |_|\_\_|\__|
           |_|            |___/
"""
    print(banner)
    print("Deployment configuration for the contract toolchain.")
    print("Keys are read from local secret files and are never printed.")


def section_header(title: str) -> None:
    """Print a section header."""
    print()
    print(f"--- {title} ---")


def section_footer(message: str) -> None:
    """Print a section footer."""
    print()
    print(message)


def error(message: str) -> None:
    """Print an error message in red."""
    print(f"{RED}[error]{RESET} {message}")


def warn(message: str) -> None:
    """Print a warning message in yellow."""
    print(f"{YELLOW}[warn]{RESET} {message}")


def info(message: str) -> None:
    """Print an info message in blue."""
    print(f"{BLUE}[info]{RESET} {message}")


def success(message: str) -> None:
    """Print a success message in green."""
    print(f"{GREEN}[success]{RESET} {message}")


def result(message: str) -> None:
    """Print a result message in cyan."""
    print(f"{CYAN}[result]{RESET} {message}")


def bold(message: str) -> str:
    """Return a bold formatted message."""
    return f"{BOLD}{message}{RESET}"


def bold_yellow(message: str) -> str:
    """Return a bold yellow formatted message."""
    return f"{BOLD}{YELLOW}{message}{RESET}"


def bold_red(message: str) -> str:
    """Return a bold red formatted message."""
    return f"{BOLD}{RED}{message}{RESET}"


def bold_cyan(message: str) -> str:
    """Return a bold cyan formatted message."""
    return f"{BOLD}{CYAN}{message}{RESET}"


def mask(secret: str, visible: int = 4) -> str:
    """Hide all but the last ``visible`` characters of a secret."""
    if not secret:
        return ""
    if len(secret) <= visible:
        return "*" * len(secret)
    return "*" * (len(secret) - visible) + secret[-visible:]


def print_fields(fields: Mapping[str, Any]) -> None:
    """Print label/value pairs, one per line, with bold labels."""
    width = max((len(label) for label in fields), default=0)
    for label, value in fields.items():
        shown = "-" if value is None else value
        print(f"{bold(label.ljust(width))}  {shown}")


def print_menu(
    title: str,
    items: Union[Dict[str, str], List[Tuple[str, str]]],
    item_formatter: Callable[[str], str] | None = None,
) -> None:
    """Print a formatted menu.

    Args:
        title: Menu title
        items: Dictionary mapping keys to labels, or list of (key, label) tuples
        item_formatter: Optional function to format menu items (default: bold)
    """
    print()
    print(f"=== {title} ===")

    if item_formatter is None:
        item_formatter = bold

    items_list = items.items() if isinstance(items, dict) else items
    for key, label in items_list:
        print(f"{key}. {item_formatter(label)}")

    print()
