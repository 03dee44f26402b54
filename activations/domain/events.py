"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseBound(DomainEvent):
    """Event raised when a machine claims an unbound license."""

    payload_fields = ("machine_id",)

    def __init__(
        self,
        license_key: str,
        machine_id: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseBound event.

        Args:
            license_key: License key
            machine_id: Machine now bound to the license
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=license_key, occurred_at=occurred_at)
        self.machine_id = machine_id


class LicenseValidated(DomainEvent):
    """Event raised for every validation attempt, successful or not."""

    payload_fields = ("reason",)

    def __init__(
        self,
        license_key: str,
        reason: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=license_key, occurred_at=occurred_at)
        self.reason = reason


class LicenseBindingReset(DomainEvent):
    """Event raised when an owner resets a license's machine binding."""

    payload_fields = ("owner_email",)

    def __init__(
        self,
        license_key: str,
        owner_email: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=license_key, occurred_at=occurred_at)
        self.owner_email = owner_email
