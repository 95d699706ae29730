from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import Field, PlainSerializer

from app.techno.schemas.common import CamelModel


Quantity = Annotated[
    Decimal,
    Field(max_digits=12, decimal_places=4),
    PlainSerializer(lambda value: format(value.normalize(), "f"), return_type=str, when_used="json"),
]


class BalanceResponse(CamelModel):
    balance_id: int
    store_code: int
    item_code: str
    quantity_on_hand: Quantity
    quantity_reserved: Quantity
    quantity_available: Quantity
    last_transaction_at: datetime | None = None


class BalanceAdjustmentRequest(CamelModel):
    store_code: int = Field(gt=0)
    item_code: str = Field(min_length=1, max_length=100)
    quantity: Quantity
