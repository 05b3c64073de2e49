# Project board: reactive project store, template components, drag-and-drop lanes
#
# Components:
#   schema.py      - Data model (Project, ProjectStatus, LaneKind)
#   validation.py  - Field constraints (Validatable, validate)
#   store.py       - In-memory reactive store with snapshot listeners
#   surface.py     - In-memory element tree, events and markup parsing
#   markup.py      - Built-in templates and mount point
#   component.py   - Component lifecycle base (instantiate, attach, configure, render)
#   dnd.py         - DragSource / DropTarget capabilities and gesture replay
#   views.py       - Creation form, lanes, project items
#   app.py         - ProjectBoard composition
#   config.py      - YAML configuration
