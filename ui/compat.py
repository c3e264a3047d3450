import flet as ft

TEXT_ACCEPTS_DECORATION = "decoration" in ft.Text.__init__.__code__.co_varnames


def strike_text(text: str, *, strike: bool = False, size: int | None = None, color: str | None = None):
    """Text that renders struck through for completed tasks."""
    if TEXT_ACCEPTS_DECORATION:
        t = ft.Text(text, size=size, color=color)
        if strike:
            t.decoration = ft.TextDecoration.LINE_THROUGH
        return t
    return ft.Text(
        text,
        size=size,
        color=color,
        style=ft.TextStyle(decoration=ft.TextDecoration.LINE_THROUGH if strike else None),
    )
