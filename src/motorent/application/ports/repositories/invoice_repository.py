"""Invoice repository port."""

from typing import Protocol

from motorent.domain.entities import Invoice


class InvoiceRepository(Protocol):
    """Port for invoice persistence."""

    async def get_by_payment_id(self, payment_id: str) -> Invoice | None: ...

    async def create_if_absent(self, invoice: Invoice) -> bool:
        """Insert invoice unless one exists for its payment. True if inserted.

        Sets invoice.number on insert; a skipped insert consumes no number.
        """
        ...
