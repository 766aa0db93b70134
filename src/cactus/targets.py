"""Well-known build and cache directory names eligible for purging."""

from __future__ import annotations

from dataclasses import dataclass

VCS_MARKER = ".git"
HIDDEN_PREFIX = "."
DEFAULT_MAX_DEPTH = 3


@dataclass(frozen=True)
class TargetGroup:
    """Directory names produced by one ecosystem's tooling."""

    id: str
    name: str
    dir_names: frozenset[str]


TARGET_GROUPS: tuple[TargetGroup, ...] = (
    TargetGroup("jvm", "Java / Gradle / Kotlin", frozenset({"build", ".gradle"})),
    TargetGroup("dotnet", ".NET / generic", frozenset({"bin", "obj"})),
    TargetGroup("node", "Node.js", frozenset({"node_modules"})),
    TargetGroup("rust", "Rust", frozenset({"target"})),
    TargetGroup(
        "python",
        "Python",
        frozenset({"__pycache__", ".mypy_cache", ".pytest_cache", ".ruff_cache", ".tox"}),
    ),
)

TARGET_NAMES: frozenset[str] = frozenset().union(*(g.dir_names for g in TARGET_GROUPS))


def group_for(name: str) -> TargetGroup | None:
    """Return the group a target directory name belongs to."""
    for group in TARGET_GROUPS:
        if name in group.dir_names:
            return group
    return None
