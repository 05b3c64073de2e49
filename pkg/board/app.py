"""
Board composition.

Wires one document, one store, the creation form and both lanes together.
Every component receives the same store instance.
"""
import logging
from typing import Any, Dict, Optional, Union

from .config import BoardConfig
from .dnd import DragSession
from .schema import LaneKind
from .store import ProjectStore
from .surface import Document, Event
from .views import ProjectInput, ProjectList

logger = logging.getLogger(__name__)


def _field_text(value: Any) -> str:
    """Form fields hold text; a missing value is an empty field."""
    return "" if value is None else str(value)


class ProjectBoard:
    """The running board: form on top, active lane, then finished lane."""

    def __init__(self, config: Optional[BoardConfig] = None, markup: Optional[str] = None):
        self.config = config or BoardConfig()
        self.document = Document.from_markup(markup if markup is not None else self.config.load_markup())
        self.store = ProjectStore()

        self.form = ProjectInput(self.document, self.store)
        self.lanes: Dict[LaneKind, ProjectList] = {
            LaneKind.ACTIVE: ProjectList(self.document, self.store, LaneKind.ACTIVE),
            LaneKind.FINISHED: ProjectList(self.document, self.store, LaneKind.FINISHED),
        }
        self._session: Optional[DragSession] = None

    def lane(self, kind: Union[LaneKind, str]) -> ProjectList:
        if isinstance(kind, str):
            kind = LaneKind.from_str(kind)
        return self.lanes[kind]

    # -------------------- user actions --------------------

    def submit(self, title: str, description: str, people: Any) -> bool:
        """Fill the form fields and submit. Returns False if the input was rejected."""
        self.form.title_el.value = _field_text(title)
        self.form.description_el.value = _field_text(description)
        self.form.people_el.value = _field_text(people)

        alerts_before = len(self.document.alerts)
        self.form.element.dispatch_event(Event("submit"))
        return len(self.document.alerts) == alerts_before

    def session(self) -> DragSession:
        """Shared session for step-wise gestures (one pointer, one drag at a time)."""
        if self._session is None:
            self._session = DragSession(self.document)
        return self._session

    def drag(self, project_id: str, lane: Union[LaneKind, str]) -> bool:
        """
        Drag a rendered project onto a lane's list.

        Raises KeyError if no element carries project_id. Returns True if the
        lane accepted the drop.
        """
        target = self.lane(lane)
        gesture = DragSession(self.document)
        gesture.start(project_id)
        try:
            if gesture.over(target.list_id):
                return gesture.drop(target.list_id)
            gesture.leave(target.list_id)
            return False
        finally:
            gesture.end()

    # -------------------- views --------------------

    def render(self) -> str:
        return self.document.to_html()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "projects": [p.to_dict() for p in self.store.projects],
            "lanes": {
                kind.value: [p.id for p in lane.assigned_projects]
                for kind, lane in self.lanes.items()
            },
            "lane_states": {kind.value: lane.drop_state.value for kind, lane in self.lanes.items()},
            "stats": self.store.stats(),
        }
