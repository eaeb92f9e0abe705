"""Prompt management module.

System instructions live in text files next to this module. A file named
``prompts/<name>.txt`` in the working directory overrides the packaged one.
"""

from functools import lru_cache
from pathlib import Path

_PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: aether/prompts/{name}.txt

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").strip()

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").strip()

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def get_kernel_prompt() -> str:
    """System instruction for simulated cell execution."""
    return load_prompt("kernel")


def get_assistant_prompt(context: str | None = None) -> str:
    """System instruction for the developer assistant, with context filled in."""
    return load_prompt("assistant").replace("{context}", context or "None")


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "load_prompt",
    "get_kernel_prompt",
    "get_assistant_prompt",
    "clear_cache",
]
