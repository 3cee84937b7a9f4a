# backend/ritto/schemas/payments.py

from pydantic import BaseModel


class PaymentWebhook(BaseModel):
    """Payload forwarded by the webhook verifier after a successful charge."""
    payment_id: str
    status: str = "approved"
