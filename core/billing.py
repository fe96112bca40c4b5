"""Billing status signal and paid-tier classification."""

from pydantic import BaseModel, ConfigDict, Field

FREE_SKU = "free"

# Resource types the backend never bills, whatever their tier
_UNBILLED_RESOURCE_TYPES = frozenset({"Konnektr.Secret"})


class BillingStatus(BaseModel):
    """Billing readiness of a project, as reported by GET .../billing/status."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    has_payment_method: bool = Field(default=False, alias="hasPaymentMethod")
    has_stripe_customer: bool | None = Field(default=None, alias="hasStripeCustomer")
    has_active_subscription: bool | None = Field(
        default=None, alias="hasActiveSubscription"
    )


def is_paid_resource(resource_type: str | None, sku: str) -> bool:
    """True when creating (resource_type, sku) requires a payment method."""
    if resource_type in _UNBILLED_RESOURCE_TYPES:
        return False
    return sku != FREE_SKU
