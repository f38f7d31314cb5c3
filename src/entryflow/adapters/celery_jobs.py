"""Celery-backed relationship queue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from celery import Celery

from entryflow.config.celery import get_celery_config

if TYPE_CHECKING:
    from entryflow.config.celery import CeleryConfig
    from entryflow.domain.ports.jobs import RelationshipRequest

log = logging.getLogger(__name__)

CREATE_RELATIONSHIPS_TASK: Final[str] = "entryflow.create_relationships"


class CeleryRelationshipQueue:
    """Send relationship requests to a Celery worker by task name.

    The worker side owns the task implementation; this adapter only publishes.
    """

    def __init__(self, app: Celery, task_name: str = CREATE_RELATIONSHIPS_TASK) -> None:
        self.app = app
        self.task_name = task_name

    def enqueue(self, request: RelationshipRequest) -> None:
        message = request.as_message()
        result = self.app.send_task(self.task_name, kwargs=message)
        log.debug("Queued %s for %s (task %s)", self.task_name, request.entry_identifier, result.id)


def create_relationship_queue(config: CeleryConfig | None = None) -> CeleryRelationshipQueue:
    """Build a queue publishing to the broker named by ``ENTRYFLOW_BROKER_URL``."""

    effective = config or get_celery_config()
    app = Celery("entryflow", broker=effective.broker_url)
    return CeleryRelationshipQueue(
        app,
        task_name=effective.relationship_task or CREATE_RELATIONSHIPS_TASK,
    )
