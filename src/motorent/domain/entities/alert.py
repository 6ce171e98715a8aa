"""Alert entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Alert:
    """Alert raised for back-office follow-up."""

    id: UUID
    kind: str
    message: str
    created_at: datetime
    contract_id: str | None = None
