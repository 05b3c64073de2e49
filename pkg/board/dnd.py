"""
Drag-and-drop capabilities.

DragSource and DropTarget are structural: a component has a capability
if it has the handler methods, and it opts in by calling wire_drag_source()
or wire_drop_target() from configure(). A component may wire either, both
or neither.

DragSession replays one pointer gesture against a document:

    start(source) → over(target) → drop(target) | leave(target) → end()
"""
import logging
from typing import Optional, Protocol, runtime_checkable

from .surface import DataTransfer, Document, DragEvent, Element

logger = logging.getLogger(__name__)

DRAG_MEDIA_TYPE = "text/plain"
DRAG_EFFECT = "move"
DROPPABLE_CLASS = "droppable"


class DragError(Exception):
    """Raised when a drag step is used out of order or on a missing element."""
    pass


@runtime_checkable
class DragSource(Protocol):
    element: Element

    def on_drag_start(self, event: DragEvent) -> None: ...

    def on_drag_end(self, event: DragEvent) -> None: ...


@runtime_checkable
class DropTarget(Protocol):
    element: Element

    def on_drag_over(self, event: DragEvent) -> None: ...

    def on_drag_leave(self, event: DragEvent) -> None: ...

    def on_drop(self, event: DragEvent) -> None: ...


def wire_drag_source(component: DragSource) -> None:
    component.element.add_event_listener("dragstart", component.on_drag_start)
    component.element.add_event_listener("dragend", component.on_drag_end)


def wire_drop_target(component: DropTarget) -> None:
    component.element.add_event_listener("dragover", component.on_drag_over)
    component.element.add_event_listener("dragleave", component.on_drag_leave)
    component.element.add_event_listener("drop", component.on_drop)


def carries_project(event: DragEvent) -> bool:
    """True if the event's payload advertises the accepted kind first."""
    transfer = event.data_transfer
    return bool(transfer and transfer.types and transfer.types[0] == DRAG_MEDIA_TYPE)


class DragSession:
    """One pointer gesture, replayed as dispatched drag events."""

    def __init__(self, document: Document):
        self.document = document
        self.source: Optional[Element] = None
        self.transfer: Optional[DataTransfer] = None
        self._accepted_by: Optional[Element] = None

    @property
    def active(self) -> bool:
        return self.source is not None

    def _element(self, element_id: str) -> Element:
        el = self.document.get_element_by_id(element_id)
        if el is None:
            raise KeyError(element_id)
        return el

    def _require_active(self, step: str) -> None:
        if not self.active:
            raise DragError(f"'{step}' without an active drag; call start() first")

    def start(self, source_id: str) -> DataTransfer:
        """Begin a drag from source_id. A drag left unfinished is abandoned first."""
        source = self._element(source_id)
        if self.active:
            self.abandon()
        self.source = source
        self.transfer = DataTransfer()
        self._accepted_by = None
        source.dispatch_event(DragEvent("dragstart", self.transfer))
        logger.debug(f"dragstart on {source!r}, types={self.transfer.types}")
        return self.transfer

    def over(self, target_id: str) -> bool:
        """Drag over a target. Returns True if the target accepted the payload."""
        self._require_active("dragover")
        target = self._element(target_id)
        accepted = not target.dispatch_event(DragEvent("dragover", self.transfer))
        self._accepted_by = target if accepted else None
        logger.debug(f"dragover on {target!r}, accepted={accepted}")
        return accepted

    def leave(self, target_id: str) -> None:
        self._require_active("dragleave")
        target = self._element(target_id)
        target.dispatch_event(DragEvent("dragleave", self.transfer))
        if self._accepted_by is target:
            self._accepted_by = None

    def drop(self, target_id: str) -> bool:
        """
        Drop on a target. Only fires if the last dragover on this target was
        accepted, the way a browser only drops on an accepting target.
        """
        self._require_active("drop")
        target = self._element(target_id)
        if self._accepted_by is not target:
            logger.debug(f"drop on {target!r} ignored: target did not accept the drag")
            return False
        if self.transfer.effect_allowed in (DRAG_EFFECT, "all", "uninitialized"):
            self.transfer.drop_effect = DRAG_EFFECT
        target.dispatch_event(DragEvent("drop", self.transfer))
        self._accepted_by = None
        logger.debug(f"drop on {target!r}")
        return True

    def abandon(self) -> None:
        """Cancel an unfinished drag: leave the highlighted target, then end on the source."""
        if not self.active:
            return
        logger.warning(f"Abandoning unfinished drag from {self.source!r}")
        if self._accepted_by is not None:
            self._accepted_by.dispatch_event(DragEvent("dragleave", self.transfer))
        self.end()

    def end(self) -> None:
        self._require_active("dragend")
        # The source may have been re-rendered away; dragend still fires on it
        self.source.dispatch_event(DragEvent("dragend", self.transfer))
        self.source = None
        self.transfer = None
        self._accepted_by = None
