"""Application service layer for tasksync.

Services orchestrate domain operations. They take their collaborators
(page query, push stream, action submitter, history store) as
constructor arguments and do no I/O of their own.

Services:
    merge_engine - Identity ledger and merge of pages and push events
    pagination - Cursor controller for continuation requests
    task_group_service - Live group view
    action_service - Action invocation lifecycle

Example usage:
    >>> from tasksync.application import TaskGroupView
    >>>
    >>> view = TaskGroupView(query, events, history)
    >>> view.activate(task_group_id)
    >>> await view.wait_until_idle()
"""

from tasksync.application.action_service import ActionLifecycleController
from tasksync.application.merge_engine import IdentityLedger, MergeEngine
from tasksync.application.pagination import CursorController
from tasksync.application.ports import (
    ActionFilter,
    ActionSubmitter,
    EventStream,
    GroupHistory,
    Navigator,
    Page,
    PageQuery,
    PageRequest,
    TaskContext,
)
from tasksync.application.task_group_service import Advisory, TaskGroupView

__all__ = [
    # Merge
    "IdentityLedger",
    "MergeEngine",
    # Pagination
    "CursorController",
    # Views
    "TaskGroupView",
    "Advisory",
    "ActionLifecycleController",
    # Ports
    "ActionFilter",
    "PageRequest",
    "Page",
    "TaskContext",
    "PageQuery",
    "EventStream",
    "ActionSubmitter",
    "Navigator",
    "GroupHistory",
]
