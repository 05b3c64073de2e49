"""
Component lifecycle.

A component is instantiated from a template, attached to a mount point,
then set up through two hooks that always run in the same order:

    configure()       wire event listeners and store listeners
    render_content()  fill the display from current data

Components are created once and never detached.
"""
import logging
from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from .surface import Document, Element

logger = logging.getLogger(__name__)

H = TypeVar("H", bound=Element)  # mount point
E = TypeVar("E", bound=Element)  # instantiated root


class ComponentError(Exception):
    """Raised when a component cannot be instantiated from its template."""
    pass


class TemplateNotFound(ComponentError):
    """Raised when a template or mount point id does not exist in the document."""
    pass


class Component(ABC, Generic[H, E]):
    """
    Base class for everything rendered on the board.

    Subclasses set their own attributes first, then call
    super().__init__(), which instantiates the template, attaches the root
    and runs configure() followed by render_content().
    """

    def __init__(
        self,
        document: Document,
        template_id: str,
        host_id: str,
        insert_at_start: bool,
        element_id: Optional[str] = None,
    ):
        self.document = document

        template_el = document.get_element_by_id(template_id)
        if template_el is None:
            raise TemplateNotFound(f"Template '{template_id}' not found")
        host_el = document.get_element_by_id(host_id)
        if host_el is None:
            raise TemplateNotFound(f"Mount point '{host_id}' not found")

        imported = document.import_node(template_el)
        if not imported:
            raise ComponentError(f"Template '{template_id}' has no element content")

        self.template_el: Element = template_el
        self.host_el: H = host_el
        self.element: E = imported[0]

        if element_id:
            self.element.id = element_id

        self._attach(insert_at_start)

        self.configure()
        self.render_content()

    def _attach(self, insert_at_start: bool) -> None:
        self.host_el.insert_adjacent_element(
            "afterbegin" if insert_at_start else "beforeend", self.element
        )
        logger.debug(f"Attached {type(self).__name__} {self.element!r} to {self.host_el!r}")

    @abstractmethod
    def configure(self) -> None:
        ...

    @abstractmethod
    def render_content(self) -> None:
        ...
