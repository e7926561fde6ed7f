"""Textual terminal front-end for TaskLite."""
