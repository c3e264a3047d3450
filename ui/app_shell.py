# ui/app_shell.py
from __future__ import annotations

import logging

import flet as ft

from core.settings import THEME, UI
from core.weekdays import day_options, normalize_day, today_index
from helpers.datetime_utils import format_time_text
from models.task import Task, TaskDraft
from services.task_store import TaskStore
from storage.config import AppConfig, persist_config
from ui import compat
from ui.dialogs import confirm
from ui.task_dialog import TaskDialog

logger = logging.getLogger("weekly_task.ui")


def initial_day(config: AppConfig) -> int:
    if config.start_on_today or config.last_selected_day is None:
        return today_index()
    return normalize_day(config.last_selected_day)


class AppShell:
    """The single screen: header, day picker and the selected day's tasks."""

    def __init__(self, page: ft.Page, store: TaskStore, config: AppConfig):
        self.page = page
        self.store = store
        self.config = config
        self.selected_day = initial_day(config)
        self.dialog = TaskDialog(page, store)

        self.page.bgcolor = THEME.background
        self.page.horizontal_alignment = ft.CrossAxisAlignment.STRETCH
        self.page.vertical_alignment = ft.MainAxisAlignment.START

        self.day_picker = ft.Dropdown(
            value=str(self.selected_day),
            options=[ft.dropdown.Option(key, text) for key, text in day_options().items()],
            on_change=self.on_day_change,
        )
        self.list_holder = ft.Column(spacing=6, scroll=ft.ScrollMode.AUTO, expand=True)

        self.root = ft.Column(
            controls=[
                self._header(),
                ft.Divider(height=1, color=THEME.divider),
                ft.Container(self.day_picker, padding=ft.padding.symmetric(horizontal=16)),
                ft.Container(
                    ft.Text("Task List", size=18, weight=ft.FontWeight.BOLD, color=THEME.task_text),
                    padding=ft.padding.only(left=16, top=16),
                ),
                ft.Container(self.list_holder, padding=ft.padding.symmetric(horizontal=16), expand=True),
            ],
            expand=True,
            spacing=0,
        )

    # ---------- Mount ----------
    def mount(self):
        self.page.controls.clear()
        self.page.add(self.root)
        self.store.subscribe(self.refresh)
        self.refresh()

    def refresh(self):
        self.list_holder.controls = self._build_list()
        self.page.update()

    # ---------- Rendering ----------
    def _header(self) -> ft.Control:
        return ft.Container(
            bgcolor=THEME.header_bg,
            padding=ft.padding.symmetric(horizontal=16, vertical=12),
            content=ft.Row(
                [
                    ft.Text(UI.app_title, size=20, weight=ft.FontWeight.BOLD, color=THEME.header_text),
                    ft.Row(
                        [
                            ft.IconButton(
                                icon=ft.Icons.REFRESH,
                                icon_color=THEME.header_text,
                                tooltip="Reset week",
                                on_click=lambda e: self.confirm_reset_week(),
                            ),
                            ft.IconButton(
                                icon=ft.Icons.DELETE_SWEEP_OUTLINED,
                                icon_color=THEME.header_text,
                                tooltip="Delete all",
                                on_click=lambda e: self.confirm_delete_all(),
                            ),
                            ft.IconButton(
                                icon=ft.Icons.ADD_CIRCLE_OUTLINE,
                                icon_color=THEME.header_text,
                                tooltip="Add task",
                                on_click=lambda e: self.open_new_task(),
                            ),
                            self._preferences_menu(),
                        ],
                        spacing=0,
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
        )

    def _preferences_menu(self) -> ft.Control:
        return ft.PopupMenuButton(
            icon=ft.Icons.MORE_VERT,
            icon_color=THEME.header_text,
            tooltip="Preferences",
            items=[
                ft.PopupMenuItem(
                    text="Open on today",
                    checked=self.config.start_on_today,
                    on_click=lambda e: self.toggle_preference(e, "start_on_today"),
                ),
                ft.PopupMenuItem(
                    text="Confirm before deleting",
                    checked=self.config.confirm_destructive,
                    on_click=lambda e: self.toggle_preference(e, "confirm_destructive"),
                ),
            ],
        )

    def _build_list(self) -> list[ft.Control]:
        tasks = self.store.tasks_for_day(self.selected_day)
        if not tasks:
            return [ft.Text("No Tasks", size=16, color=THEME.text_subtle)]
        return [self._build_item(task) for task in tasks]

    def _build_item(self, task: Task) -> ft.Control:
        color = THEME.text_subtle if task.done else THEME.task_text
        lines: list[ft.Control] = [compat.strike_text(task.text, strike=task.done, size=16, color=color)]
        if task.time:
            lines.append(
                ft.Row(
                    [
                        ft.Icon(ft.Icons.SCHEDULE, size=12, color=color),
                        compat.strike_text(format_time_text(task.time), strike=task.done, size=12, color=color),
                    ],
                    spacing=4,
                )
            )
        if task.detail:
            lines.append(compat.strike_text(task.detail, strike=task.done, size=12, color=THEME.text_subtle))

        trailing: list[ft.Control] = []
        if task.once:
            trailing.append(
                ft.Container(
                    ft.Text("ONCE", size=10, weight=ft.FontWeight.BOLD, color=THEME.badge_text),
                    bgcolor=THEME.badge_bg,
                    border_radius=6,
                    padding=ft.padding.symmetric(horizontal=6, vertical=2),
                )
            )
        trailing.extend(
            [
                ft.IconButton(
                    icon=ft.Icons.EDIT_OUTLINED,
                    icon_color=THEME.task_text,
                    tooltip="Edit",
                    on_click=lambda e, t=task: self.dialog.open(TaskDraft.from_task(t)),
                ),
                ft.IconButton(
                    icon=ft.Icons.DELETE_OUTLINE,
                    icon_color=THEME.task_text,
                    tooltip="Delete",
                    on_click=lambda e, tid=task.id: self.confirm_delete(tid),
                ),
            ]
        )

        return ft.Row(
            [
                ft.Checkbox(
                    value=task.done,
                    on_change=lambda e, tid=task.id: self.store.toggle_done(tid),
                    shape=ft.CircleBorder(),
                ),
                ft.Column(lines, spacing=2, expand=True),
                ft.Row(trailing, spacing=0),
            ],
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        )

    # ---------- Actions ----------
    def on_day_change(self, e: ft.ControlEvent):
        self.selected_day = normalize_day(e.control.value, default=self.selected_day)
        self.config.last_selected_day = self.selected_day
        persist_config(self.config)
        self.refresh()

    def toggle_preference(self, e: ft.ControlEvent, name: str):
        value = not getattr(self.config, name)
        setattr(self.config, name, value)
        e.control.checked = value
        logger.info("Preference %s set to %s", name, value)
        persist_config(self.config)
        self.page.update()

    def open_new_task(self):
        self.dialog.open(TaskDraft(day=self.selected_day))

    def confirm_delete(self, task_id: str):
        confirm(
            self.page,
            title="Delete Task",
            message="Are you sure you want to delete this task?",
            confirm_label="Delete",
            on_confirm=lambda: self.store.delete(task_id),
            enabled=self.config.confirm_destructive,
        )

    def confirm_delete_all(self):
        confirm(
            self.page,
            title="Delete All",
            message="Are you sure you want to delete all tasks?",
            confirm_label="Delete All",
            on_confirm=self.store.delete_all,
            enabled=self.config.confirm_destructive,
        )

    def confirm_reset_week(self):
        confirm(
            self.page,
            title="Reset Week",
            message="This will reset weekly tasks and remove once tasks. Continue?",
            confirm_label="Reset",
            on_confirm=self.store.reset_weekly,
            enabled=self.config.confirm_destructive,
        )


__all__ = ["AppShell", "initial_day"]
