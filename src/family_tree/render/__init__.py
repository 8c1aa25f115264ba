from family_tree.render.text_tree import (
    calculate_age,
    couple_label,
    display_name,
    focus_title,
    format_date,
    full_name,
    member_label,
    render_forest,
)

__all__ = [
    "calculate_age",
    "couple_label",
    "display_name",
    "focus_title",
    "format_date",
    "full_name",
    "member_label",
    "render_forest",
]
