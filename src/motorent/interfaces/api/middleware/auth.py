"""Auth middleware - resolves the caller identity from a bearer token."""

import falcon.asgi

from motorent.domain.value_objects import Identity


class AuthMiddleware:
    """Middleware that validates the bearer token and sets req.context.user.

    req.context.user is an Identity, or None when no valid token was sent.
    Resources decide whether an identity is required.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        user = self._keycloak.decode_token(auth[7:])
        if user and user.user_id:
            req.context.user = Identity(user_id=user.user_id, role=user.role, email=user.email)
