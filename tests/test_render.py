from datetime import date

from rich.console import Console

from family_tree.builder import build_forest, find_node
from family_tree.models import Member
from family_tree.render import (
    calculate_age,
    display_name,
    focus_title,
    format_date,
    full_name,
    member_label,
    render_forest,
)


def test_names():
    m = Member(
        id="1",
        first_name="Maria",
        middle_name="Luz",
        last_name="Castillo",
        maiden_middle_name="Cabral",
        nick_name="Lulu",
    )

    assert display_name(m) == "Lulu"
    assert full_name(m) == "Maria Luz Castillo (Cabral)"
    assert display_name(Member(id="2", first_name="Ana")) == "Ana"


def test_format_date():
    assert format_date("1950-03-03") == "Mar 3, 1950"
    assert format_date("1950-03-03T00:00:00Z") == "Mar 3, 1950"
    assert format_date("circa 1900") == "circa 1900"
    assert format_date(None) is None


def test_calculate_age():
    today = date(2024, 6, 15)

    assert calculate_age("2000-06-15", today=today) == 24
    assert calculate_age("2000-06-16", today=today) == 23
    assert calculate_age("1930-05-14", "2001-11-02") == 71
    assert calculate_age(None) is None
    assert calculate_age("unknown") is None


def test_member_label_text():
    m = Member(id="1", first_name="Jose", last_name="Castillo",
               birthdate="1930-05-14", deathdate="2001-11-02")

    text = member_label(m).plain

    assert text.startswith("Jose ✝ Jose Castillo")
    assert "b. May 14, 1930 (71)" in text
    assert "d. Nov 2, 2001" in text
    assert "b." not in member_label(m, show_dates=False).plain


def test_focus_title(sample_records):
    forest = build_forest(sample_records)

    assert focus_title(find_node(forest, "c1")) == "Pedro & Rosa's Family"
    assert focus_title(find_node(forest, "c2")) == "Ana's Family"


def test_render_forest_lists_every_couple(sample_records):
    forest = build_forest(sample_records)
    console = Console(record=True, width=200)

    console.print(render_forest(forest, "Castillo - Cabral Family", today=date(2024, 1, 1)))
    output = console.export_text()

    assert "Castillo - Cabral Family" in output
    for name in ("Jose", "Maria", "Pete", "Rosa", "Ana", "Luis", "Carlos", "Elena", "Tomas"):
        assert name in output
    assert output.index("Elena") < output.index("Carlos")
