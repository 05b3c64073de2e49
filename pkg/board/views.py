"""
Board components: the creation form, the two lanes, and project items.
"""
import logging
import math
import re
from enum import Enum
from typing import List, Optional, Tuple, Union

from .component import Component, ComponentError
from .dnd import (
    DRAG_EFFECT,
    DRAG_MEDIA_TYPE,
    DROPPABLE_CLASS,
    carries_project,
    wire_drag_source,
    wire_drop_target,
)
from .markup import APP_HOST_ID, PROJECT_INPUT_TEMPLATE, PROJECT_LIST_TEMPLATE, SINGLE_PROJECT_TEMPLATE
from .schema import LaneKind, Project
from .store import ProjectStore
from .surface import Document, DragEvent, Element, Event
from .validation import Validatable, validate

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input, please try again!"


class DropState(Enum):
    IDLE = "idle"
    HIGHLIGHTED = "highlighted"


NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


def _to_number(text: str) -> Union[int, float]:
    """Coerce people-count text; anything that is not a whole number ("3", "3.0") becomes NaN."""
    text = text.strip()
    if not NUMBER_RE.fullmatch(text):
        return math.nan
    value = float(text)
    return int(value) if value.is_integer() else math.nan


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ProjectInput — creation form
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ProjectInput(Component[Element, Element]):
    """Form that validates title, description and people, then adds a project."""

    def __init__(self, document: Document, store: ProjectStore):
        self.store = store
        super().__init__(document, PROJECT_INPUT_TEMPLATE, APP_HOST_ID, True, "user-input")

    def _field(self, field_id: str) -> Element:
        el = self.element.query_selector(f"#{field_id}")
        if el is None:
            raise ComponentError(f"Form field '#{field_id}' missing from template")
        return el

    def configure(self) -> None:
        self.title_el = self._field("title")
        self.description_el = self._field("description")
        self.people_el = self._field("people")
        self.element.add_event_listener("submit", self.submit_handler)

    def render_content(self) -> None:
        pass

    def gather_user_input(self) -> Optional[Tuple[str, str, int]]:
        """Validated (title, description, people), or None after alerting the user."""
        title = self.title_el.value
        description = self.description_el.value
        people = _to_number(self.people_el.value)

        title_validatable = Validatable(value=title, required=True)
        description_validatable = Validatable(value=description, required=True, min_length=10)
        people_validatable = Validatable(value=people, required=True, min=1, max=5)

        if not (
            validate(title_validatable)
            and validate(description_validatable)
            and validate(people_validatable)
        ):
            self.document.alert(INVALID_INPUT_MESSAGE)
            return None
        return title, description, int(people)

    def clear_inputs(self) -> None:
        self.title_el.value = ""
        self.description_el.value = ""
        self.people_el.value = ""

    def submit_handler(self, event: Event) -> None:
        event.prevent_default()
        user_input = self.gather_user_input()
        if user_input is None:
            logger.warning("Rejected project submission")
            return
        title, description, people = user_input
        self.store.add_project(title, description, people)
        self.clear_inputs()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ProjectItem — one draggable project
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ProjectItem(Component[Element, Element]):
    """Renders a project and offers it as a drag payload."""

    def __init__(self, document: Document, host_id: str, project: Project):
        self.project = project
        super().__init__(document, SINGLE_PROJECT_TEMPLATE, host_id, False, project.id)

    @property
    def persons(self) -> str:
        return self.project.persons

    def on_drag_start(self, event: DragEvent) -> None:
        event.data_transfer.set_data(DRAG_MEDIA_TYPE, self.project.id)
        event.data_transfer.effect_allowed = DRAG_EFFECT

    def on_drag_end(self, event: DragEvent) -> None:
        logger.debug(f"dragend {self.project.id}")

    def configure(self) -> None:
        wire_drag_source(self)

    def render_content(self) -> None:
        self.element.query_selector("h2").text_content = self.project.title
        self.element.query_selector("h3").text_content = f"{self.persons} assigned"
        self.element.query_selector("p").text_content = self.project.description


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ProjectList — a lane and drop target
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ProjectList(Component[Element, Element]):
    """
    One lane of the board.

    Shows the store's projects whose status matches the lane and moves
    dropped projects to that status. Every store change re-renders the
    whole list from scratch.
    """

    def __init__(self, document: Document, store: ProjectStore, kind: LaneKind):
        self.store = store
        self.kind = kind
        self.assigned_projects: List[Project] = []
        super().__init__(document, PROJECT_LIST_TEMPLATE, APP_HOST_ID, False, f"{kind.value}-projects")

    @property
    def list_id(self) -> str:
        return f"{self.kind.value}-projects-list"

    @property
    def list_el(self) -> Element:
        return self.element.query_selector("ul")

    @property
    def drop_state(self) -> DropState:
        if self.list_el.class_list.contains(DROPPABLE_CLASS):
            return DropState.HIGHLIGHTED
        return DropState.IDLE

    def on_drag_over(self, event: DragEvent) -> None:
        if carries_project(event):
            event.prevent_default()
            self.list_el.class_list.add(DROPPABLE_CLASS)

    def on_drag_leave(self, event: DragEvent) -> None:
        self.list_el.class_list.remove(DROPPABLE_CLASS)

    def on_drop(self, event: DragEvent) -> None:
        project_id = event.data_transfer.get_data(DRAG_MEDIA_TYPE) if event.data_transfer else ""
        self.store.move_project(project_id, self.kind.status)
        self.list_el.class_list.remove(DROPPABLE_CLASS)

    def configure(self) -> None:
        wire_drop_target(self)
        self.store.add_listener(self._on_projects_changed)

    def render_content(self) -> None:
        self.list_el.id = self.list_id
        self.element.query_selector("h2").text_content = f"{self.kind.value.upper()} PROJECTS"

    def _on_projects_changed(self, projects: Tuple[Project, ...]) -> None:
        self.assigned_projects = [p for p in projects if p.status == self.kind.status]
        self.render_projects()

    def render_projects(self) -> None:
        list_el = self.document.get_element_by_id(self.list_id)
        list_el.clear()
        for project in self.assigned_projects:
            ProjectItem(self.document, self.list_id, project)
        logger.debug(f"Rendered {len(self.assigned_projects)} projects in {self.kind.value} lane")
