"""
Project store (in-memory).

Holds the authoritative, ordered list of projects and notifies listeners
with a snapshot after every mutation. Nothing is persisted: the store lives
as long as the process does.
"""
import logging
import uuid
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from .schema import Project, ProjectStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[Tuple[T, ...]], None]


def make_project_id() -> str:
    """Generate a unique project ID (also usable as an element id)."""
    return f"prj-{uuid.uuid4().hex}"


class State(Generic[T]):
    """Listener registry shared by reactive stores."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def add_listener(self, listener_fn: Listener) -> None:
        """
        Register a listener for future mutations.

        Registration is silent: the listener is not called with the current
        state, only with the snapshot of the next mutation. There is no way to
        unregister.
        """
        self._listeners.append(listener_fn)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self, snapshot: Tuple[T, ...]) -> None:
        """Call every listener in registration order. A failing listener is logged and skipped."""
        for listener_fn in list(self._listeners):
            try:
                listener_fn(snapshot)
            except Exception:
                logger.exception(f"Listener {listener_fn!r} failed")


class ProjectStore(State[Project]):
    """In-memory store for projects."""

    def __init__(self):
        super().__init__()
        self._projects: List[Project] = []

    # -------------------- mutation --------------------

    def add_project(self, title: str, description: str, people: int) -> Project:
        """
        Append a new Active project and notify listeners.

        No validation happens here; callers validate their input first.
        """
        project_id = make_project_id()
        while self._index_of(project_id) is not None:
            project_id = make_project_id()

        project = Project(
            id=project_id,
            title=title,
            description=description,
            people=people,
            status=ProjectStatus.ACTIVE,
        )
        self._projects.append(project)
        logger.info(f"Added project {project.id} ({project.title!r})")
        self._notify(self.projects)
        return project

    def move_project(self, project_id: str, new_status: ProjectStatus) -> None:
        """
        Change a project's status and notify listeners.

        Unknown ids and moves to the current status are silent no-ops:
        nothing changes and no listener runs.
        """
        idx = self._index_of(project_id)
        if idx is None:
            logger.debug(f"move_project: unknown id {project_id!r}, ignored")
            return

        project = self._projects[idx]
        if project.status == new_status:
            return

        self._projects[idx] = project.with_status(new_status)
        logger.info(
            f"Moved project {project_id} from {project.status.value} to {new_status.value}"
        )
        self._notify(self.projects)

    # -------------------- queries --------------------

    @property
    def projects(self) -> Tuple[Project, ...]:
        """Snapshot of all projects in insertion order."""
        return tuple(self._projects)

    def get(self, project_id: str) -> Optional[Project]:
        idx = self._index_of(project_id)
        return self._projects[idx] if idx is not None else None

    def list_by_status(self, status: ProjectStatus) -> List[Project]:
        return [p for p in self._projects if p.status == status]

    def stats(self) -> Dict[str, int]:
        return {
            "total": len(self._projects),
            "active": sum(1 for p in self._projects if p.status == ProjectStatus.ACTIVE),
            "finished": sum(1 for p in self._projects if p.status == ProjectStatus.FINISHED),
        }

    def __len__(self) -> int:
        return len(self._projects)

    def _index_of(self, project_id: str) -> Optional[int]:
        for idx, project in enumerate(self._projects):
            if project.id == project_id:
                return idx
        return None
