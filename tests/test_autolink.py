"""Tests for the HTML auto-linker."""

import pytest

from afriwiki.errors import MalformedInput
from afriwiki.models.entity import LinkableEntity
from afriwiki.processors.autolink import (
    AutoLinker,
    apply_auto_links,
    apply_static_auto_links,
)

KENYA_ANCHOR = '<a href="/pays/ke" title="Voir la page Kenya" class="wiki-autolink">'


def test_first_occurrence_only(countries):
    text = "Le Kenya est un pays. Le Kenya a une forte économie."
    result = apply_auto_links(text, countries)
    assert result == (
        f"Le {KENYA_ANCHOR}Kenya</a> est un pays. Le Kenya a une forte économie."
    )


def test_longest_match_first():
    entities = [
        LinkableEntity(name="Côte", target_path="/glossaire/cote", category="glossary-term"),
        LinkableEntity(name="Côte d'Ivoire", target_path="/pays/ci", category="place"),
    ]
    result = apply_auto_links("Elle vient de Côte d'Ivoire.", entities)
    assert '<a href="/pays/ci"' in result
    assert ">Côte d'Ivoire</a>." in result
    assert "/glossaire/cote" not in result


def test_typographic_apostrophe_matches(countries):
    result = apply_auto_links("Née en Côte d’Ivoire en 1985.", countries)
    assert '<a href="/pays/ci" title="Voir la page Côte d\'Ivoire"' in result
    assert ">Côte d’Ivoire</a>" in result


@pytest.mark.parametrize("text", ["Un entrepreneur malien.", "Un documentaire animalier."])
def test_word_boundary_safety(countries, text):
    assert apply_auto_links(text, countries) == text


def test_no_match_inside_longer_word(countries):
    text = "Jomo Kenyatta"
    assert apply_auto_links(text, countries) == text


def test_case_insensitive_keeps_surface_form(countries):
    result = apply_auto_links("<p>KENYA</p>", countries)
    assert result == f"<p>{KENYA_ANCHOR}KENYA</a></p>"


def test_no_double_wrap_inside_existing_anchor():
    entities = [LinkableEntity(name="Doe", target_path="/e/jane-doe", category="person")]
    html = '<p>Voir <a href="/e/jane-doe">Jane Doe</a>. Doe a fondé une startup.</p>'
    assert apply_auto_links(html, entities) == html


def test_existing_anchor_content_is_never_linked(countries):
    html = '<a href="/ailleurs">Kenya</a>'
    assert apply_auto_links(html, countries) == html


def test_attribute_values_are_untouched(countries):
    html = '<img alt="Kenya" src="/img/kenya.png"> Kenya'
    result = apply_auto_links(html, countries)
    assert result == f'<img alt="Kenya" src="/img/kenya.png"> {KENYA_ANCHOR}Kenya</a>'


def test_href_values_are_untouched(countries):
    html = '<a href="/pays/kenya-infos">infos</a> sur le Kenya'
    result = apply_auto_links(html, countries)
    assert result.startswith('<a href="/pays/kenya-infos">infos</a>')
    assert result.count("<a ") == 2


def test_code_and_script_are_skipped(countries):
    html = "<code>Kenya</code><script>var c = 'Kenya';</script> Kenya"
    result = apply_auto_links(html, countries)
    assert result == (
        "<code>Kenya</code><script>var c = 'Kenya';</script> " f"{KENYA_ANCHOR}Kenya</a>"
    )


def test_idempotent_on_own_output(catalog):
    html = (
        "<p>Jane Doe a lancé une fintech au Kenya.</p>"
        "<p>Doe est une entrepreneur kenyan. Le Kenya soutient les startups.</p>"
    )
    once = apply_auto_links(html, catalog)
    assert once != html
    assert apply_auto_links(once, catalog) == once


def test_full_name_linked_before_surname(catalog):
    result = apply_auto_links("Jane Doe a fondé Acme.", catalog)
    assert result == (
        '<a href="/e/jane-doe" title="Voir la page Jane Doe" class="wiki-autolink">'
        "Jane Doe</a> a fondé Acme."
    )


def test_later_entities_rescan_modified_text(catalog):
    result = apply_auto_links("Jane Doe, puis Doe.", catalog)
    # the full name wins the first mention, the surname takes the next one
    assert result.count('href="/e/jane-doe"') == 2
    assert ">Jane Doe</a>" in result
    assert ">Doe</a>." in result


def test_character_references_are_not_matched():
    entities = [LinkableEntity(name="amp", target_path="/x", category="glossary-term")]
    html = "<p>Tom &amp; Jerry</p>"
    assert apply_auto_links(html, entities) == html


def test_markup_preserved_verbatim(countries):
    html = '<DIV Class="bio">\n  <p data-x=\'1\'>Le Sénégal<br/>et le Mali</p>\n</DIV>'
    result = apply_auto_links(html, countries)
    assert result.startswith('<DIV Class="bio">\n  <p data-x=\'1\'>')
    assert "<br/>" in result
    assert '<a href="/pays/sn"' in result
    assert '<a href="/pays/ml"' in result


@pytest.mark.parametrize(
    "html",
    [
        "<svg><![CDATA[Kenya]]></svg> Lagos",
        "<!x> Lagos",
        "<!-- Kenya --><?php echo 1 ?> Lagos",
        "<!DOCTYPE html><p>1 &lt 2 &#39 &#x27; &amp;</p>",
    ],
)
def test_declarations_and_references_round_trip(html):
    entities = [LinkableEntity(name="Abuja", target_path="/ville/abuja", category="place")]
    assert apply_auto_links(html, entities) == html


def test_cdata_content_is_not_linked(countries):
    result = apply_auto_links("<svg><![CDATA[Kenya]]></svg> Kenya", countries)
    assert result == f"<svg><![CDATA[Kenya]]></svg> {KENYA_ANCHOR}Kenya</a>"


def test_reference_position_across_lines(countries):
    html = "<p>A\nB &eacute\nLe Kenya &amp; le Mali</p>"
    result = apply_auto_links(html, countries)
    assert "B &eacute\nLe " in result
    assert f"{KENYA_ANCHOR}Kenya</a> &amp; le " in result


def test_target_already_linked_blocks_other_names(countries):
    html = '<p><a href="/pays/ke">ici</a>. Le Kenya est grand.</p>'
    result = apply_auto_links(html, countries)
    assert result == html
    assert result.count("<a ") == 1


def test_empty_string():
    assert apply_auto_links("", []) == ""


def test_non_string_input_raises(countries):
    with pytest.raises(MalformedInput):
        apply_auto_links(None, countries)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        apply_auto_links(42, countries)  # type: ignore[arg-type]


def test_without_css_class(countries):
    linker = AutoLinker(countries, css_class=None)
    assert linker.link("Kenya") == '<a href="/pays/ke" title="Voir la page Kenya">Kenya</a>'


def test_link_counted_and_batch(countries):
    linker = AutoLinker(countries)
    _, count = linker.link_counted("Kenya, Mali et Sénégal. Kenya.")
    assert count == 3
    results = linker.link_batch(["Kenya", "rien"])
    assert results[0].startswith(KENYA_ANCHOR)
    assert results[1] == "rien"


def test_static_auto_links():
    result = apply_static_auto_links("<p>Une startup du Bénin.</p>")
    assert '<a href="/pays/bj"' in result
    assert '<a href="/glossaire/startup"' in result
