"""Permission gate - decides whether a caller may perform an operation.

Two authorization paths coexist: granular grants from permission profiles
and a legacy allow-list of primitive roles for entry points not yet
migrated. Both are AccessRule values and go through evaluate().
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from motorent.application.catalog import OperationCatalog
from motorent.application.ports import PermissionChecker
from motorent.domain.exceptions import Forbidden, Unauthenticated
from motorent.domain.value_objects import (
    AccessRule,
    GranularRule,
    Identity,
    PermissionType,
    RoleListRule,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an authorization check."""

    allowed: bool
    reason: str | None = None


class PermissionGate:
    """Evaluates access rules against the operation catalog and profile grants."""

    def __init__(self, catalog: OperationCatalog, permission_checker: PermissionChecker) -> None:
        self._catalog = catalog
        self._checker = permission_checker

    @property
    def catalog(self) -> OperationCatalog:
        return self._catalog

    async def check_permission(
        self,
        user_id: str,
        operation_key: str,
        required_type: PermissionType | str | None = None,
    ) -> AccessDecision:
        """Granular check only. Raises UnknownOperation for unregistered keys."""
        operation = self._catalog.get(operation_key)
        permission_type = (
            PermissionType(required_type) if required_type else operation.permission_type
        )
        if await self._checker.check(user_id, operation.key, permission_type):
            return AccessDecision(True, f"{permission_type} granted on {operation.key}")
        return AccessDecision(False, f"no {permission_type} grant on {operation.key}")

    async def evaluate(
        self, identity: Identity | None, rules: Sequence[AccessRule]
    ) -> AccessDecision:
        """Allow if any rule allows.

        Operation keys are validated before anything else, so an
        unregistered key fails even when a role rule would allow.
        """
        for rule in rules:
            if isinstance(rule, GranularRule):
                self._catalog.get(rule.operation_key)

        if identity is None or not identity.user_id:
            raise Unauthenticated()

        reasons: list[str] = []
        for rule in rules:
            if isinstance(rule, GranularRule):
                decision = await self.check_permission(
                    identity.user_id, rule.operation_key, rule.permission_type
                )
                if decision.allowed:
                    return decision
                reasons.append(decision.reason or "")
            elif isinstance(rule, RoleListRule):
                if identity.role and identity.role in rule.roles:
                    return AccessDecision(True, f"role {identity.role} allowed")
                reasons.append(f"role {identity.role} not in {sorted(rule.roles)}")
            else:
                raise TypeError(f"Unsupported access rule: {rule!r}")
        return AccessDecision(False, "; ".join(reasons) or "no rules")

    async def require_permission(
        self,
        identity: Identity | None,
        operation_key: str,
        required_type: PermissionType | str | None = None,
        fallback_roles: Iterable[str] = (),
    ) -> str:
        """Guard for protected entry points; returns the caller's user id.

        Raises UnknownOperation, Unauthenticated or Forbidden.
        """
        operation = self._catalog.get(operation_key)
        permission_type = (
            PermissionType(required_type) if required_type else operation.permission_type
        )
        rules: list[AccessRule] = [GranularRule(operation.key, permission_type)]
        roles = frozenset(fallback_roles)
        if roles:
            rules.append(RoleListRule(roles))

        decision = await self.evaluate(identity, rules)
        if not decision.allowed:
            logger.info(
                "Denied %s on %s for user %s: %s",
                permission_type,
                operation.key,
                identity.user_id if identity else None,
                decision.reason,
            )
            raise Forbidden()
        return identity.user_id
