"""
CarValue Backend — Entity Events
==================================

What:  Post-commit notifications for user and report rows.
Why:   Operators want an audit trail of account changes ("User created with
       id: 7") without hiding that behaviour inside ORM lifecycle hooks.
How:   Services call queue() right after a successful flush. The event waits
       in session.info until the transaction commits, then emit() logs it on
       the `carvalue.events` logger and hands it to each listener registered
       with subscribe(). A rollback, or a session closed without commit,
       discards the queued events.

Listeners run synchronously inside the commit call. A listener that raises
propagates out of commit() like any other error in that request.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List

from sqlalchemy import event
from sqlalchemy.orm import Session

logger = logging.getLogger("carvalue.events")

CREATED = "created"
UPDATED = "updated"
REMOVED = "removed"

PENDING_KEY = "carvalue.pending_events"


@dataclass(frozen=True)
class EntityEvent:
    entity: str
    action: str
    entity_id: int

    def describe(self) -> str:
        return f"{self.entity.capitalize()} {self.action} with id: {self.entity_id}"


EntityListener = Callable[[EntityEvent], None]

_listeners: List[EntityListener] = []


def subscribe(listener: EntityListener) -> None:
    if listener not in _listeners:
        _listeners.append(listener)


def unsubscribe(listener: EntityListener) -> None:
    if listener in _listeners:
        _listeners.remove(listener)


def emit(entity: str, action: str, entity_id: int) -> EntityEvent:
    """Log an entity event and deliver it to every registered listener."""
    event_ = EntityEvent(entity=entity, action=action, entity_id=entity_id)
    logger.info(event_.describe())
    for listener in list(_listeners):
        listener(event_)
    return event_


def queue(db, entity: str, action: str, entity_id: int) -> EntityEvent:
    """
    Hold an event on the session until its transaction commits.

    `db` may be an AsyncSession or a plain Session; both expose the same
    `info` dict.
    """
    pending = EntityEvent(entity=entity, action=action, entity_id=entity_id)
    db.info.setdefault(PENDING_KEY, []).append(pending)
    return pending


def _deliver_pending(session: Session) -> None:
    if session.in_nested_transaction():
        return
    for pending in session.info.pop(PENDING_KEY, []):
        emit(pending.entity, pending.action, pending.entity_id)


def _discard_pending(session: Session, transaction) -> None:
    # Fires after after_commit on success; only the outermost transaction counts
    if transaction.parent is None:
        session.info.pop(PENDING_KEY, None)


event.listen(Session, "after_commit", _deliver_pending)
event.listen(Session, "after_transaction_end", _discard_pending)
