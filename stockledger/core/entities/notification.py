"""Low-stock notification entities."""

from datetime import datetime

from pydantic import BaseModel, Field

from stockledger.core.entities.inventory import utc_now


class LowStockAlert(BaseModel):
    """An item dropped below its low-stock threshold."""

    item_name: str
    current_quantity: int
    threshold: int
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def message(self) -> str:
        return (
            f'Item "{self.item_name}" has only {self.current_quantity} units left '
            f"(threshold: {self.threshold})"
        )
