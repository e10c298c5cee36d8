"""Typed views of Freelo API records.

The client returns decoded JSON untouched; these models are the lenient,
typed projection used by the tool layer. Only the task identifier is
required; every other field, nested identifiers included, may be absent or
null and defaults to None (or an empty list). Unknown fields are preserved.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FreeloModel(BaseModel):
    """Base for all Freelo records."""

    model_config = ConfigDict(extra="allow")


class User(FreeloModel):
    """A Freelo user (author or worker)."""

    id: Optional[int] = None
    fullname: Optional[str] = None
    email: Optional[str] = None


class State(FreeloModel):
    """Lifecycle state, e.g. "active", "completed", "archived"."""

    id: Optional[int] = None
    state: Optional[str] = None


class TaskList(FreeloModel):
    """A task list. The API names this "tasklist"."""

    id: Optional[int] = None
    name: Optional[str] = None
    state: Optional[State] = None


class Project(FreeloModel):
    """A project."""

    id: Optional[int] = None
    name: Optional[str] = None
    state: Optional[State] = None


class File(FreeloModel):
    """A file attached to a comment. Downloadable by UUID only."""

    uuid: Optional[str] = None
    filename: Optional[str] = None
    size: Optional[int] = None
    caption: Optional[str] = None
    description: Optional[str] = None
    date_add: Optional[str] = None
    date_edited_at: Optional[str] = None


class Comment(FreeloModel):
    """A task comment; the task description is a comment too."""

    id: Optional[int] = None
    content: Optional[str] = None
    date_add: Optional[str] = None
    author: Optional[User] = None
    is_description: Optional[bool] = None
    files: List[File] = Field(default_factory=list)


class Task(FreeloModel):
    """A task as returned by GET /task/{id}."""

    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    priority_enum: Optional[str] = None  # "l", "m", "h"
    due_date: Optional[str] = None
    due_date_end: Optional[str] = None
    date_add: Optional[str] = None
    date_complete: Optional[str] = None
    date_finished: Optional[str] = None
    author: Optional[User] = None
    worker: Optional[User] = None
    tasklist: Optional[TaskList] = None
    project: Optional[Project] = None
    state: Optional[State] = None
    tags: List[Any] = Field(default_factory=list)
    time_estimate: Optional[float] = None
    completed: Optional[bool] = None
    comments: List[Comment] = Field(default_factory=list)


class Subtask(FreeloModel):
    """A subtask as listed by GET /task/{id}/subtasks."""

    id: Optional[int] = None
    task_id: Optional[int] = None
    name: Optional[str] = None
    date_add: Optional[str] = None
    due_date: Optional[str] = None
    due_date_end: Optional[str] = None
    count_comments: Optional[int] = None
    count_subtasks: Optional[int] = None
    author: Optional[User] = None
    worker: Optional[User] = None
    state: Optional[State] = None
    project: Optional[Project] = None
    tasklist: Optional[TaskList] = None


class SubtasksData(FreeloModel):
    """Inner payload of the subtasks envelope."""

    subtasks: List[Dict[str, Any]] = Field(default_factory=list)


class SubtasksPage(FreeloModel):
    """Paginated envelope around a task's subtasks."""

    total: Optional[int] = None
    count: Optional[int] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    data: SubtasksData = Field(default_factory=SubtasksData)
