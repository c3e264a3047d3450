# weekly_task/main.py
import logging

import flet as ft

from core.log import configure_logging
from core.settings import APP_NAME, UI
from services.task_store import TaskStore
from services.weekly_reset import WeeklyResetController
from storage.config import load_config
from storage.db import init_db
from storage.kv import SqlKeyValueStore
from ui.app_shell import AppShell

logger = logging.getLogger("weekly_task.main")


def bootstrap() -> TaskStore:
    """Open storage, load tasks and run the once-per-launch weekly reset."""
    init_db()
    store = TaskStore(SqlKeyValueStore())
    store.load()
    WeeklyResetController(store).run_on_launch()
    return store


def main(page: ft.Page):
    configure_logging()
    logger.info("Starting %s", APP_NAME)

    page.title = UI.app_title
    page.theme_mode = ft.ThemeMode(UI.theme_mode)
    page.theme = ft.Theme(color_scheme_seed=UI.color_scheme_seed)
    page.padding = 0
    page.window.width = UI.window_width
    page.window.height = UI.window_height

    store = bootstrap()
    shell = AppShell(page, store, load_config())
    shell.mount()


def run():
    ft.app(target=main)


if __name__ == "__main__":
    run()
