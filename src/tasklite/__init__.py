"""TaskLite - projects and a Kanban task board over the TaskLite REST API."""

__version__ = "0.1.0"
