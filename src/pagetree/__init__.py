"""pagetree: folders and pages kept as a flat list with parent pointers.

Modules:
    models        Node and its on-disk shape
    tree          pure queries: children, descendants, breadcrumbs
    collection    in-memory snapshot of one collection
    controllers/  create/delete and drag-drop reparenting
    navigation    current folder and breadcrumb trail
    editor        edit buffer for one open page
    workspace     hub wiring the above for one collection
    storage/      key-value store, repository, export/import
"""

__version__ = "0.1.0"
