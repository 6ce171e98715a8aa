"""Authorization - permission gate."""

from motorent.application.authorization.permission_gate import AccessDecision, PermissionGate

__all__ = ["AccessDecision", "PermissionGate"]
