"""PostgreSQL permission profile repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from motorent.domain.entities import PermissionGrant, PermissionProfile, ProfileAssignment
from motorent.domain.value_objects import PermissionType


class PostgresProfileRepository:
    """Profiles, grants and user assignments."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _load_grants(self, profiles: list[PermissionProfile]) -> list[PermissionProfile]:
        if not profiles:
            return profiles
        by_id = {p.id: p for p in profiles}
        cur = await self._conn.execute(
            "SELECT profile_id, operation_key, permission_types FROM permission_grant "
            "WHERE profile_id = ANY(%s) ORDER BY operation_key",
            (list(by_id),),
        )
        for r in await cur.fetchall():
            by_id[r[0]].grants.append(
                PermissionGrant(
                    profile_id=r[0],
                    operation_key=r[1],
                    permission_types=frozenset(PermissionType(t) for t in r[2]),
                )
            )
        return profiles

    async def get_by_id(self, profile_id: UUID) -> PermissionProfile | None:
        """Get profile by id, with grants."""
        cur = await self._conn.execute(
            "SELECT id, name, description, is_system FROM permission_profile WHERE id = %s",
            (profile_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        profile = PermissionProfile(id=r[0], name=r[1], description=r[2] or "", is_system=r[3])
        await self._load_grants([profile])
        return profile

    async def get_by_name(self, name: str) -> PermissionProfile | None:
        """Get profile by name, with grants."""
        cur = await self._conn.execute(
            "SELECT id, name, description, is_system FROM permission_profile WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        profile = PermissionProfile(id=r[0], name=r[1], description=r[2] or "", is_system=r[3])
        await self._load_grants([profile])
        return profile

    async def list_all(self) -> list[PermissionProfile]:
        """List all profiles, with grants."""
        cur = await self._conn.execute(
            "SELECT id, name, description, is_system FROM permission_profile ORDER BY name"
        )
        rows = await cur.fetchall()
        profiles = [
            PermissionProfile(id=r[0], name=r[1], description=r[2] or "", is_system=r[3])
            for r in rows
        ]
        return await self._load_grants(profiles)

    async def list_for_user(self, user_id: str) -> list[PermissionProfile]:
        """Profiles assigned to user, with grants."""
        cur = await self._conn.execute(
            "SELECT p.id, p.name, p.description, p.is_system FROM permission_profile p "
            "JOIN user_profile up ON up.profile_id = p.id WHERE up.user_id = %s "
            "ORDER BY p.name",
            (user_id,),
        )
        rows = await cur.fetchall()
        profiles = [
            PermissionProfile(id=r[0], name=r[1], description=r[2] or "", is_system=r[3])
            for r in rows
        ]
        return await self._load_grants(profiles)

    async def upsert(self, profile: PermissionProfile) -> PermissionProfile:
        """Insert profile or update description of the existing one with the same name."""
        cur = await self._conn.execute(
            "INSERT INTO permission_profile (id, name, description, is_system) "
            "VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (name) DO UPDATE SET description = EXCLUDED.description "
            "RETURNING id",
            (profile.id, profile.name, profile.description, profile.is_system),
        )
        r = await cur.fetchone()
        profile.id = r[0]
        return profile

    async def replace_grants(self, profile_id: UUID, grants: list[PermissionGrant]) -> None:
        """Delete existing grants of profile and insert the given ones."""
        await self._conn.execute(
            "DELETE FROM permission_grant WHERE profile_id = %s",
            (profile_id,),
        )
        if not grants:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO permission_grant (profile_id, operation_key, permission_types) "
                "VALUES (%s, %s, %s)",
                [
                    (profile_id, g.operation_key, sorted(t.value for t in g.permission_types))
                    for g in grants
                ],
            )

    async def assign(self, assignment: ProfileAssignment) -> ProfileAssignment:
        """Assign profile to user; existing assignment is kept."""
        cur = await self._conn.execute(
            "INSERT INTO user_profile (user_id, profile_id, assigned_at, assigned_by) "
            "VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (user_id, profile_id) DO UPDATE SET user_id = EXCLUDED.user_id "
            "RETURNING user_id, profile_id, assigned_at, assigned_by",
            (
                assignment.user_id,
                assignment.profile_id,
                assignment.assigned_at,
                assignment.assigned_by,
            ),
        )
        r = await cur.fetchone()
        return ProfileAssignment(user_id=r[0], profile_id=r[1], assigned_at=r[2], assigned_by=r[3])

    async def unassign(self, user_id: str, profile_id: UUID) -> bool:
        """Remove assignment. True if one existed."""
        cur = await self._conn.execute(
            "DELETE FROM user_profile WHERE user_id = %s AND profile_id = %s",
            (user_id, profile_id),
        )
        return cur.rowcount > 0
