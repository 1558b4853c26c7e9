"""Server-rendered web UI for the todo board."""
