"""Controllers that mutate a collection: create/delete and drag-drop reparenting."""
