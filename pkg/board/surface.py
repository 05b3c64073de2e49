"""
In-memory rendering surface.

A small element tree with the handful of document operations the board
components rely on: id lookup, template instantiation, adjacent insertion,
class lists, event listeners with bubbling, and HTML output.

Markup is parsed with html.parser. Elements inside <template> are inert:
they can be cloned through Document.import_node() but are never found by id.
"""
import logging
from html.parser import HTMLParser
from typing import Callable, Dict, Iterator, List, Optional, Union

from markupsafe import escape

logger = logging.getLogger(__name__)

VOID_TAGS = {"area", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Events
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class Event:
    """A dispatched event. Bubbles from the target up through its ancestors."""

    def __init__(self, event_type: str):
        self.type = event_type
        self.target: Optional["Element"] = None
        self.current_target: Optional["Element"] = None
        self.default_prevented = False
        self.propagation_stopped = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def __repr__(self):
        return f"<{type(self).__name__} {self.type}>"


class DataTransfer:
    """Payload carried by a drag gesture, keyed by media type."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self.effect_allowed = "uninitialized"
        self.drop_effect = "none"

    @property
    def types(self) -> List[str]:
        return list(self._data)

    def set_data(self, fmt: str, data: str) -> None:
        self._data[fmt] = str(data)

    def get_data(self, fmt: str) -> str:
        return self._data.get(fmt, "")

    def clear_data(self) -> None:
        self._data.clear()


class DragEvent(Event):
    def __init__(self, event_type: str, data_transfer: Optional[DataTransfer] = None):
        super().__init__(event_type)
        self.data_transfer = data_transfer


EventHandler = Callable[[Event], None]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Nodes
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class Text:
    def __init__(self, data: str):
        self.data = data
        self.parent: Optional["Element"] = None

    def to_html(self) -> str:
        return str(escape(self.data))


class ClassList:
    """Ordered set of CSS class names backed by the element's class attribute."""

    def __init__(self, element: "Element"):
        self._element = element

    def _names(self) -> List[str]:
        return self._element.attrs.get("class", "").split()

    def _store(self, names: List[str]) -> None:
        if names:
            self._element.attrs["class"] = " ".join(names)
        else:
            self._element.attrs.pop("class", None)

    def add(self, *names: str) -> None:
        current = self._names()
        current.extend(n for n in names if n not in current)
        self._store(current)

    def remove(self, *names: str) -> None:
        self._store([n for n in self._names() if n not in names])

    def contains(self, name: str) -> bool:
        return name in self._names()

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names())

    def __len__(self) -> int:
        return len(self._names())


Node = Union["Element", Text]


class Element:
    def __init__(self, tag: str, attrs: Optional[Dict[str, str]] = None):
        self.tag = tag.lower()
        self.attrs: Dict[str, str] = dict(attrs or {})
        self.children: List[Node] = []
        self.parent: Optional["Element"] = None
        self._listeners: Dict[str, List[EventHandler]] = {}
        self.value: str = self.attrs.get("value", "")

    def __repr__(self):
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident}>"

    # -------------------- attributes --------------------

    @property
    def id(self) -> str:
        return self.attrs.get("id", "")

    @id.setter
    def id(self, value: str) -> None:
        self.attrs["id"] = value

    @property
    def class_list(self) -> ClassList:
        return ClassList(self)

    @property
    def text_content(self) -> str:
        parts = []
        for child in self.children:
            parts.append(child.data if isinstance(child, Text) else child.text_content)
        return "".join(parts)

    @text_content.setter
    def text_content(self, value: str) -> None:
        self.clear()
        if value:
            self.append(Text(value))

    @property
    def element_children(self) -> List["Element"]:
        return [c for c in self.children if isinstance(c, Element)]

    # -------------------- tree --------------------

    def append(self, node: Node) -> Node:
        self._detach(node)
        node.parent = self
        self.children.append(node)
        return node

    def prepend(self, node: Node) -> Node:
        self._detach(node)
        node.parent = self
        self.children.insert(0, node)
        return node

    def insert_adjacent_element(self, position: str, element: "Element") -> "Element":
        """Insert element as first ("afterbegin") or last ("beforeend") child."""
        if position == "afterbegin":
            return self.prepend(element)
        if position == "beforeend":
            return self.append(element)
        raise ValueError(f"Unsupported insert position: {position}")

    def clear(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    @staticmethod
    def _detach(node: Node) -> None:
        if node.parent is not None:
            node.parent.children.remove(node)
            node.parent = None

    def iter_elements(self, include_templates: bool = True) -> Iterator["Element"]:
        """Depth-first descendants (not including self)."""
        for child in self.children:
            if not isinstance(child, Element):
                continue
            yield child
            if child.tag == "template" and not include_templates:
                continue
            yield from child.iter_elements(include_templates)

    def query_selector(self, selector: str) -> Optional["Element"]:
        """First descendant matching a simple `tag#id.class` selector."""
        matcher = _parse_selector(selector)
        for el in self.iter_elements():
            if matcher(el):
                return el
        return None

    def query_selector_all(self, selector: str) -> List["Element"]:
        matcher = _parse_selector(selector)
        return [el for el in self.iter_elements() if matcher(el)]

    def clone(self) -> "Element":
        """Deep copy without parent link or event listeners."""
        twin = Element(self.tag, self.attrs)
        twin.value = self.value
        for child in self.children:
            twin.append(child.clone() if isinstance(child, Element) else Text(child.data))
        return twin

    # -------------------- events --------------------

    def add_event_listener(self, event_type: str, handler: EventHandler) -> None:
        self._listeners.setdefault(event_type, []).append(handler)

    def listeners(self, event_type: str) -> List[EventHandler]:
        return list(self._listeners.get(event_type, []))

    def dispatch_event(self, event: Event) -> bool:
        """
        Run listeners on this element, then on each ancestor.

        Returns False if any listener called prevent_default().
        """
        event.target = self
        node: Optional[Element] = self
        while node is not None and not event.propagation_stopped:
            event.current_target = node
            for handler in node.listeners(event.type):
                handler(event)
            node = node.parent
        event.current_target = None
        return not event.default_prevented

    # -------------------- output --------------------

    def to_html(self) -> str:
        attrs = dict(self.attrs)
        if self.tag == "input" and self.value:
            attrs["value"] = self.value
        rendered = "".join(f' {k}="{escape(v)}"' for k, v in attrs.items())
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{rendered}>"
        if self.tag == "textarea":
            inner = str(escape(self.value))
        else:
            inner = "".join(child.to_html() for child in self.children)
        return f"<{self.tag}{rendered}>{inner}</{self.tag}>"


def _parse_selector(selector: str) -> Callable[[Element], bool]:
    selector = selector.strip()
    tag, el_id, classes = "", "", []
    token, kind = "", "tag"

    def flush():
        nonlocal tag, el_id
        if not token:
            return
        if kind == "tag":
            tag = token.lower()
        elif kind == "id":
            el_id = token
        else:
            classes.append(token)

    for ch in selector:
        if ch in "#.":
            flush()
            token, kind = "", "id" if ch == "#" else "class"
        else:
            token += ch
    flush()

    def matches(el: Element) -> bool:
        if tag and el.tag != tag:
            return False
        if el_id and el.id != el_id:
            return False
        return all(el.class_list.contains(c) for c in classes)

    return matches


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Markup parsing
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class _TreeBuilder(HTMLParser):
    def __init__(self, root: Element):
        super().__init__(convert_charrefs=True)
        self.stack: List[Element] = [root]

    def handle_starttag(self, tag, attrs):
        el = Element(tag, {k: (v if v is not None else "") for k, v in attrs})
        self.stack[-1].append(el)
        if el.tag not in VOID_TAGS:
            self.stack.append(el)

    def handle_startendtag(self, tag, attrs):
        el = Element(tag, {k: (v if v is not None else "") for k, v in attrs})
        self.stack[-1].append(el)

    def handle_endtag(self, tag):
        tag = tag.lower()
        for idx in range(len(self.stack) - 1, 0, -1):
            if self.stack[idx].tag == tag:
                del self.stack[idx:]
                return

    def handle_data(self, data):
        if not data.strip():
            return
        parent = self.stack[-1]
        if parent.tag == "textarea":
            parent.value += data
        else:
            parent.append(Text(data))


class Document:
    """Root of a parsed element tree."""

    def __init__(self, root: Optional[Element] = None):
        self.root = root or Element("body")
        self.alerts: List[str] = []
        self.on_alert: Optional[Callable[[str], None]] = None

    @classmethod
    def from_markup(cls, markup: str) -> "Document":
        root = Element("body")
        builder = _TreeBuilder(root)
        builder.feed(markup)
        builder.close()
        return cls(root)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        if not element_id:
            return None
        for el in self.root.iter_elements(include_templates=False):
            if el.id == element_id:
                return el
        return None

    def import_node(self, template: Element) -> List[Element]:
        """Fresh deep copies of a template's element content."""
        return [child.clone() for child in template.element_children]

    def alert(self, message: str) -> None:
        """Blocking user notification."""
        logger.warning(f"alert: {message}")
        self.alerts.append(message)
        if self.on_alert is not None:
            self.on_alert(message)

    def to_html(self) -> str:
        return "".join(child.to_html() for child in self.root.children)
