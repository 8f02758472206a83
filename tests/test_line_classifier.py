import pytest

from stook_recipes.app.services.ocr_parsing.line_classifier import (
    LineContext,
    classify_line,
    tokenize,
)
from stook_recipes.app.services.ocr_parsing.models import ClassifiedLine, LineKind


@pytest.mark.parametrize(
    "line",
    ["12", "---", "© Uitgeverij Kosmos 2021", "Foto: Jan de Vries", "Voedingswaarde per portie", "450 kcal", "ISBN 9789021570000", "XL"],
)
def test_noise_lines(line):
    assert classify_line(line, 0).kind == LineKind.NOISE


@pytest.mark.parametrize(
    "line,kind,strength",
    [
        ("20 g zout", LineKind.INGREDIENT, 1.0),
        ("1,5 kg rundvlees", LineKind.INGREDIENT, 1.0),
        ("½ theelepel zout", LineKind.INGREDIENT, 1.0),
        ("een snufje zout", LineKind.INGREDIENT, 1.0),
        ("I kg varkensschouder", LineKind.INGREDIENT, 1.0),
        ("1 1/2 el olie", LineKind.INGREDIENT, 1.0),
        ("1 ½ el olie", LineKind.INGREDIENT, 1.0),
        ("1. Wrijf het vlees in", LineKind.STEP, 1.0),
        ("Stap 2 Rook het vlees", LineKind.STEP, 1.0),
        ("Verwarm de oven voor op 180°C", LineKind.STEP, 0.7),
        ("6 personen, 480 min, 95°C", LineKind.METADATA, 0.8),
        ("Kooktijd: 3 uur", LineKind.METADATA, 1.0),
        ("Bereidingstijd: 20 min", LineKind.METADATA, 1.0),
        ("Pulled Pork", LineKind.TITLE, 1.0),
    ],
)
def test_classify_line_without_context(line, kind, strength):
    result = classify_line(line, 0)
    assert result.kind == kind
    assert result.strength == strength
    assert result.text == line


def test_step_marker_is_recorded():
    assert classify_line("2) Leg het vlees op de grill", 3).marker == "2)"
    assert classify_line("20 g zout", 0).marker is None


def test_headings_switch_section():
    heading = classify_line("Bereiding", 4)
    assert heading.kind == LineKind.NOISE
    assert heading.section == "steps"

    with_servings = classify_line("Ingrediënten voor 4 personen", 1)
    assert with_servings.kind == LineKind.METADATA
    assert with_servings.section == "ingredients"


def test_steps_section_takes_every_line():
    context = LineContext(section="steps", content_seen=True, body_seen=True)
    result = classify_line("Het vlees moet goed rusten", 6, context)
    assert result.kind == LineKind.STEP
    assert result.strength == 0.8


def test_lowercase_line_continues_unfinished_step():
    previous = ClassifiedLine(index=5, text="1. Rook het vlees op", kind=LineKind.STEP, marker="1.")
    context = LineContext(section="steps", content_seen=True, body_seen=True, previous=previous)
    result = classify_line("lage temperatuur", 6, context)
    assert result.kind == LineKind.STEP
    assert result.continues


def test_finished_step_is_not_continued():
    previous = ClassifiedLine(index=5, text="1. Rook het vlees.", kind=LineKind.STEP, marker="1.")
    context = LineContext(section="steps", content_seen=True, body_seen=True, previous=previous)
    assert not classify_line("Laat het rusten", 6, context).continues


def test_ingredients_section_accepts_lines_without_quantity():
    context = LineContext(section="ingredients", content_seen=True, body_seen=True)
    result = classify_line("Zout en peper", 3, context)
    assert result.kind == LineKind.INGREDIENT
    assert result.strength == 0.8


def test_quantity_line_with_temperature_stays_an_ingredient():
    context = LineContext(section="ingredients", content_seen=True, body_seen=True)
    result = classify_line("250 ml water van 80 graden", 4, context)
    assert result.kind == LineKind.INGREDIENT
    assert result.strength == 1.0


def test_servings_line_in_ingredients_section_is_metadata():
    context = LineContext(section="ingredients", content_seen=True, body_seen=True)
    assert classify_line("4 personen", 2, context).kind == LineKind.METADATA


def test_step_number_without_period():
    lines = tokenize("Pulled Pork\n1 Rub aanbrengen\n2 Roken op 110 graden")
    assert [line.kind for line in lines] == [LineKind.TITLE, LineKind.STEP, LineKind.STEP]
    assert [line.marker for line in lines[1:]] == ["1", "2"]


def test_bare_number_out_of_sequence_is_not_a_step():
    lines = tokenize("Kip\n2 Rode uien\n20 g zout")
    assert lines[1].kind == LineKind.INGREDIENT
    assert lines[1].marker is None


def test_bare_number_before_unit_is_not_a_step():
    context = LineContext(content_seen=True)
    assert classify_line("1 Kg brisket", 1, context).kind == LineKind.INGREDIENT


def test_tips_section_is_noise():
    context = LineContext(section="tips", content_seen=True, body_seen=True)
    assert classify_line("Lekker met coleslaw", 9, context).kind == LineKind.NOISE


def test_bullets_outside_sections():
    assert classify_line("• 2 uien", 2).kind == LineKind.INGREDIENT
    assert classify_line("• Snijd de uien fijn", 2).kind == LineKind.STEP
    assert classify_line("• 2 uien", 2).marker == "•"


def test_title_zone_closes_after_body():
    context = LineContext(content_seen=True, body_seen=True)
    assert classify_line("Pulled Pork", 7, context).kind == LineKind.NOISE


def test_prose_after_title_is_marked():
    context = LineContext(content_seen=True)
    result = classify_line("Klassieker op de kamado.", 1, context)
    assert result.kind == LineKind.NOISE
    assert result.is_prose


def test_tokenize_recipe_card():
    text = "Pulled Pork\nKlassieker op de kamado.\n6 personen, 480 min, 95°C\n20 g zout\n1. Rub aanbrengen\n2. Roken op 110°C, 480 min"
    kinds = [line.kind for line in tokenize(text)]
    assert kinds == [
        LineKind.TITLE,
        LineKind.NOISE,
        LineKind.METADATA,
        LineKind.INGREDIENT,
        LineKind.STEP,
        LineKind.STEP,
    ]


def test_tokenize_drops_empty_lines_and_keeps_order():
    lines = tokenize("Brisket\n\n\n1. Rook\n\n2. Wikkel")
    assert [line.index for line in lines] == [0, 1, 2]
    assert [line.text for line in lines] == ["Brisket", "1. Rook", "2. Wikkel"]


@pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
def test_tokenize_degenerate_input(text):
    assert tokenize(text) == []
