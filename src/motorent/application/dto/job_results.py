"""Results returned by maintenance jobs."""

from dataclasses import dataclass, field


@dataclass
class SweepResult:
    """Outcome of a recovery sweep."""

    processed: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class SeedResult:
    """Outcome of seeding the permission system."""

    operations: int = 0
    grants_by_profile: dict[str, int] = field(default_factory=dict)
    migrated_users: int = 0
