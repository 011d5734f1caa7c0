"""Infrastructure implementations of application service interfaces."""

from hrms.infrastructure.services.cascade_event_publisher import LogOnlyCascadeEventPublisher

__all__ = ["LogOnlyCascadeEventPublisher"]
