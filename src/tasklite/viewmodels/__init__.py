"""View-models: local entity state, optimistic mutations and reconciliation.

Hosts (the Textual app and the CLI) drive these and render from their state.
"""

from .auth import LoginViewModel, RegisterViewModel
from .board import DraftValidationError, TaskBoardViewModel, TaskDraft
from .header import HeaderViewModel
from .projects import ProjectDraft, ProjectListViewModel, filter_sort

__all__ = [
    "LoginViewModel",
    "RegisterViewModel",
    "HeaderViewModel",
    "ProjectListViewModel",
    "ProjectDraft",
    "filter_sort",
    "TaskBoardViewModel",
    "TaskDraft",
    "DraftValidationError",
]
