# weekly_task/ui/task_dialog.py
from __future__ import annotations

import logging

import flet as ft

from core.settings import UI
from core.weekdays import day_options, normalize_day
from models.task import TaskDraft
from services.errors import NotFoundError, ValidationError
from services.task_store import TaskStore
from ui.dialogs import close_alert_dialog, open_alert_dialog, toast

logger = logging.getLogger("weekly_task.ui")

ONCE_OPTIONS = {"weekly": "Weekly", "once": "Once"}


def _number_dropdown(label: str, upper: int, value: int) -> ft.Dropdown:
    return ft.Dropdown(
        label=label,
        value=str(value),
        options=[ft.dropdown.Option(str(i), f"{i:02d}") for i in range(upper + 1)],
        expand=True,
    )


class TaskDialog:
    """Add/edit form. Opening it with a draft that carries a ``task_id`` edits that task."""

    def __init__(self, page: ft.Page, store: TaskStore):
        self.page = page
        self.store = store
        self._dialog: ft.AlertDialog | None = None

    def open(self, draft: TaskDraft) -> None:
        title_tf = ft.TextField(label="Task title", value=draft.text, autofocus=True)
        detail_tf = ft.TextField(
            label="Task detail",
            value=draft.detail,
            multiline=True,
            min_lines=UI.detail_min_lines,
        )
        hour_dd = _number_dropdown("Hour", 23, draft.hour)
        minute_dd = _number_dropdown("Minute", 59, draft.minute)
        second_dd = _number_dropdown("Second", 59, draft.second)
        day_dd = ft.Dropdown(
            label="Day",
            value=str(draft.day),
            options=[ft.dropdown.Option(key, text) for key, text in day_options().items()],
        )
        once_dd = ft.Dropdown(
            label="Repeat",
            value="once" if draft.once else "weekly",
            options=[ft.dropdown.Option(key, text) for key, text in ONCE_OPTIONS.items()],
        )

        def collect() -> TaskDraft:
            return TaskDraft(
                text=title_tf.value or "",
                detail=detail_tf.value or "",
                day=normalize_day(day_dd.value),
                once=once_dd.value == "once",
                hour=int(hour_dd.value or 0),
                minute=int(minute_dd.value or 0),
                second=int(second_dd.value or 0),
                task_id=draft.task_id,
            )

        def on_save(_):
            filled = collect()
            try:
                if filled.is_edit:
                    self.store.update(filled.task_id, **filled.fields())
                else:
                    self.store.create(**filled.fields())
            except ValidationError as exc:
                # The dialog stays open so the user can fix the input.
                title_tf.error_text = "Title is required" if not filled.text.strip() else None
                self.page.update()
                toast(self.page, str(exc))
                return
            except NotFoundError:
                logger.warning("Edited task %s no longer exists", filled.task_id)
                toast(self.page, "Task no longer exists")
            close_alert_dialog(self.page, self._dialog)

        content = ft.Container(
            width=UI.dialog_width,
            content=ft.Column(
                [
                    title_tf,
                    detail_tf,
                    ft.Row([hour_dd, minute_dd, second_dd], spacing=8),
                    day_dd,
                    once_dd,
                ],
                spacing=12,
                tight=True,
                scroll=ft.ScrollMode.AUTO,
            ),
        )
        actions = [
            ft.TextButton("Cancel", on_click=lambda e: close_alert_dialog(self.page, self._dialog)),
            ft.FilledButton("Update" if draft.is_edit else "Save", on_click=on_save),
        ]
        self._dialog = open_alert_dialog(
            self.page,
            title="Edit task" if draft.is_edit else "New task",
            content=content,
            actions=actions,
        )


__all__ = ["TaskDialog"]
