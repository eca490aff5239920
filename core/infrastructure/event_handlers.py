"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and business metrics.
"""

import logging

from brands.domain.events import BrandCreated, BrandDeleted, BrandUpdated
from core.domain.events import DomainEvent, EventHandler
from core.metrics import brands_created_total, brands_deleted_total, brands_updated_total

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes one structured log line per domain event.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class BrandMetricsEventHandler(EventHandler):
    """Counts brand lifecycle events in Prometheus."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, BrandCreated):
            brands_created_total.inc()
        elif isinstance(event, BrandUpdated):
            brands_updated_total.labels(mode="partial" if event.partial else "full").inc()
        elif isinstance(event, BrandDeleted):
            brands_deleted_total.inc()


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = BrandMetricsEventHandler()

    for event_type in (BrandCreated, BrandUpdated, BrandDeleted):
        event_bus.subscribe(event_type, audit_handler)
        event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
