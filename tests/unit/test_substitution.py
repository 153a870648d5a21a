"""Unit tests for the placeholder substitution engine."""

import pytest
from lxml import etree

from biodata.interfaces.errors import XmlParseError
from biodata.strategies.template_engine import (
    PlaceholderSubstituter,
    ReplacementSet,
    substitute_text,
)
from biodata.strategies.template_engine.substitution import TEXT_RUN_TAG

from conftest import SLIDE_XML

A_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"


def _slide(*runs: str) -> bytes:
    body = "".join(f"<a:r><a:rPr lang=\"en-US\"/><a:t>{run}</a:t></a:r>" for run in runs)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<p:sld xmlns:a="{A_NS}" xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main">'
        f"<p:cSld><p:spTree><p:sp><p:txBody><a:p>{body}</a:p></p:txBody></p:sp></p:spTree></p:cSld>"
        "</p:sld>"
    ).encode("utf-8")


def _runs(xml: bytes) -> list[str]:
    root = etree.fromstring(xml)
    return [node.text or "" for node in root.iter(TEXT_RUN_TAG)]


# =============================================================================
# ReplacementSet Tests
# =============================================================================


class TestReplacementSet:
    """Test suite for ReplacementSet."""

    def test_biodata_order(self):
        """Tokens are applied in BirthDate, X-Rasi, X-Natchathiram order."""
        replacements = ReplacementSet.for_biodata("1990-01-01", "Leo", "Magam")

        assert list(replacements.items()) == [
            ("BirthDate", "1990-01-01"),
            ("X-Rasi", "Leo"),
            ("X-Natchathiram", "Magam"),
        ]
        assert len(replacements) == 3

    def test_overlapping_tokens_rejected(self):
        """A token contained in another token is refused."""
        with pytest.raises(ValueError, match="overlaps"):
            ReplacementSet.from_mapping({"Rasi": "a", "X-Rasi": "b"})

    def test_empty_token_rejected(self):
        with pytest.raises(ValueError):
            ReplacementSet.from_mapping({"": "value"})

    def test_immutable(self):
        replacements = ReplacementSet.for_biodata("1990-01-01", "Leo", "Magam")

        with pytest.raises(ValueError):
            replacements.replacements = ()


# =============================================================================
# Text Run Tests
# =============================================================================


class TestSubstituteText:
    """Test suite for the per-run substitution primitive."""

    def test_spec_example(self):
        """Both tokens in one run are replaced."""
        replacements = ReplacementSet.from_mapping({"BirthDate": "1990-01-01", "X-Rasi": "Leo"})

        text, count = substitute_text("BirthDate is X-Rasi", replacements)

        assert text == "1990-01-01 is Leo"
        assert count == 2

    def test_all_occurrences_replaced(self):
        replacements = ReplacementSet.from_mapping({"X-Rasi": "Leo"})

        text, count = substitute_text("X-Rasi / X-Rasi", replacements)

        assert text == "Leo / Leo"
        assert count == 2

    def test_case_sensitive(self):
        replacements = ReplacementSet.from_mapping({"BirthDate": "1990-01-01"})

        text, count = substitute_text("birthdate BIRTHDATE", replacements)

        assert text == "birthdate BIRTHDATE"
        assert count == 0

    def test_literal_matching(self):
        """Tokens and values are never interpreted as patterns."""
        replacements = ReplacementSet.from_mapping({"X.Rasi": r"$1 \g<0> $&"})

        text, _ = substitute_text("XyRasi X.Rasi", replacements)

        assert text == r"XyRasi $1 \g<0> $&"


# =============================================================================
# Document Tests
# =============================================================================


class TestPlaceholderSubstituter:
    """Test suite for PlaceholderSubstituter."""

    @pytest.fixture
    def substituter(self):
        return PlaceholderSubstituter()

    @pytest.fixture
    def replacements(self):
        return ReplacementSet.for_biodata("1990-01-01", "Simha", "Magam")

    def test_replaces_placeholders(self, substituter, replacements):
        result = substituter.substitute(SLIDE_XML, replacements)

        assert _runs(result) == [
            "1990-01-01",
            "Rasi: Simha",
            "Star: Magam",
            "Family details",
        ]

    def test_accepts_text_input(self, substituter, replacements):
        result = substituter.substitute(SLIDE_XML.decode("utf-8"), replacements)

        assert _runs(result)[0] == "1990-01-01"

    def test_untouched_runs_are_identical(self, substituter, replacements):
        """Runs without a token serialize exactly as before."""
        before = etree.fromstring(SLIDE_XML)
        after = etree.fromstring(substituter.substitute(SLIDE_XML, replacements))

        before_runs = list(before.iter(f"{{{A_NS}}}r"))
        after_runs = list(after.iter(f"{{{A_NS}}}r"))

        assert len(before_runs) == len(after_runs)
        assert etree.tostring(before_runs[3]) == etree.tostring(after_runs[3])

    def test_formatting_preserved(self, substituter, replacements):
        """Run properties of rewritten runs are unchanged."""
        after = etree.fromstring(substituter.substitute(SLIDE_XML, replacements))
        rpr = after.find(f".//{{{A_NS}}}rPr")

        assert rpr.get("b") == "1"
        assert rpr.get("lang") == "en-US"

    def test_placeholder_free_round_trip(self, substituter, replacements):
        """A document without tokens comes back canonically equal."""
        xml = _slide("Name", "Education", "Family details")

        result = substituter.substitute(xml, replacements)

        assert etree.tostring(etree.fromstring(result), method="c14n") == etree.tostring(
            etree.fromstring(xml), method="c14n"
        )

    def test_no_match_across_runs(self, substituter, replacements):
        """A token split over two runs is left alone."""
        xml = _slide("Birth", "Date")

        result = substituter.substitute(xml, replacements)

        assert _runs(result) == ["Birth", "Date"]

    def test_keeps_standalone_declaration(self, substituter, replacements):
        result = substituter.substitute(SLIDE_XML, replacements)

        assert result.startswith(b"<?xml version='1.0' encoding='UTF-8' standalone='yes'?>")

    def test_escapes_values(self, substituter):
        """Markup in values ends up as text, not as elements."""
        replacements = ReplacementSet.from_mapping({"X-Rasi": "<b>Leo</b> & co"})

        result = substituter.substitute(_slide("X-Rasi"), replacements)

        assert _runs(result) == ["<b>Leo</b> & co"]
        assert b"&lt;b&gt;Leo&lt;/b&gt; &amp; co" in result

    def test_empty_run_ignored(self, substituter, replacements):
        result = substituter.substitute(_slide(""), replacements)

        assert _runs(result) == [""]

    def test_malformed_xml(self, substituter, replacements):
        with pytest.raises(XmlParseError):
            substituter.substitute(b"<p:sld><a:t>BirthDate</p:sld>", replacements)

    def test_empty_document(self, substituter, replacements):
        with pytest.raises(XmlParseError):
            substituter.substitute(b"", replacements)
