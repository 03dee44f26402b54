"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and metrics.
"""

import logging

from accounts.domain.events import (
    BetaSignupApproved,
    BetaSignupSubmitted,
    IdentityRevoked,
    RevocationStopped,
)
from activations.domain.events import LicenseBindingReset, LicenseBound, LicenseValidated
from core import metrics
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import LicenseIssuanceReplayed, LicenseIssued

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (
    LicenseIssued,
    LicenseIssuanceReplayed,
    LicenseBound,
    LicenseBindingReset,
    IdentityRevoked,
    RevocationStopped,
    BetaSignupSubmitted,
    BetaSignupApproved,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every state-changing event to the audit logger.
    """

    audit_logger = logging.getLogger("audit")

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        self.audit_logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={"event": event.to_dict()},
        )


class MetricsEventHandler(EventHandler):
    """Event handler updating Prometheus counters."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, LicenseIssued):
            metrics.licenses_issued_total.labels(source=event.source).inc()
        elif isinstance(event, LicenseIssuanceReplayed):
            metrics.license_issuance_replays_total.inc()
        elif isinstance(event, LicenseValidated):
            metrics.license_validations_total.labels(reason=event.reason).inc()
        elif isinstance(event, LicenseBound):
            metrics.license_bindings_total.inc()
        elif isinstance(event, LicenseBindingReset):
            metrics.license_resets_total.inc()
        elif isinstance(event, IdentityRevoked):
            metrics.identities_revoked_total.inc()
        elif isinstance(event, RevocationStopped):
            metrics.revocations_incomplete_total.labels(failed_step=event.failed_step).inc()


# Register event handlers
def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)

    for event_type in AUDITED_EVENTS + (LicenseValidated,):
        event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
