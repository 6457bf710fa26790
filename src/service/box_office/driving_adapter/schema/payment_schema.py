from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.box_office.domain.entity.payment_entity import Payment
from src.service.box_office.domain.enum.payment_status import PaymentMethod


class PaymentCreateRequest(BaseModel):
    amount: float = Field(gt=0)
    method: PaymentMethod = PaymentMethod.CREDIT_CARD
    currency: str = 'USD'

    model_config = ConfigDict(
        json_schema_extra={'example': {'amount': 90.0, 'method': 'credit_card', 'currency': 'USD'}}
    )


class PaymentCompleteRequest(BaseModel):
    transaction_reference: Optional[str] = None


class PaymentResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': 1,
                'customer_id': 7,
                'amount': 90.0,
                'currency': 'USD',
                'method': 'credit_card',
                'status': 'completed',
                'transaction_reference': 'PAY_MOCK_1A2B3C4D',
                'created_at': '2025-01-10T10:30:00',
                'updated_at': '2025-01-10T10:31:00',
            }
        }
    )

    id: int
    customer_id: int
    amount: float
    currency: str
    method: str
    status: str
    transaction_reference: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, payment: Payment) -> 'PaymentResponse':
        if payment.id is None:
            raise ValueError('Payment ID should not be None after persistence.')
        return cls(
            id=payment.id,
            customer_id=payment.customer_id,
            amount=payment.amount,
            currency=payment.currency,
            method=payment.method.value,
            status=payment.status.value,
            transaction_reference=payment.transaction_reference,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )
