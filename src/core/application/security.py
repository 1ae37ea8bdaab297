"""Application-level security dependencies.

Defines the session/profile provider without importing infrastructure.
The actual implementations are injected via FastAPI dependency_overrides in main.py.
"""

from typing import NoReturn


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_current_profile_id() -> str:
    """Get the authenticated caller's profile ID (401 when absent)."""
    _missing_dependency("get_current_profile_id")


async def get_optional_profile_id() -> str | None:
    """Get the caller's profile ID when a session is present, else None.

    Only used to decorate listing rows with ownership; anonymous visitors
    browse the same catalog.
    """
    _missing_dependency("get_optional_profile_id")
