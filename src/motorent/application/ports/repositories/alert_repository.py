"""Alert repository port."""

from datetime import datetime
from typing import Protocol

from motorent.domain.entities import Alert


class AlertRepository(Protocol):
    """Port for alert persistence."""

    async def create(self, alert: Alert) -> Alert: ...

    async def find_recent(self, contract_id: str, kind: str, since: datetime) -> Alert | None: ...
