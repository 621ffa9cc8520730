"""Tests for the minification API."""

import codecs
import logging
from unittest.mock import patch

import pytest
from lxml import etree

from minify_xml import (
    ConfigValidationError,
    MinifyOptions,
    MinifyResult,
    XMLMinifier,
    minify,
    minify_file,
)
from minify_xml.api.minifier import PASSES, trim_document

CATALOG = """<?xml version = "1.0"  encoding="UTF-8"   standalone="yes" ?>
<!-- catalog -->
<catalog  xmlns="urn:catalog"  xmlns:unused="urn:unused"
          xmlns:media="urn:media"  xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
    <book  id = "b1"   xsi:type="hardcover">
        <title>Learning   XML</title>
        <media:cover  media:format="png" ></media:cover>
        <notes><![CDATA[  keep   <this>  as is  ]]></notes>
    </book>
</catalog>
"""

CATALOG_MINIFIED = (
    '<?xml version="1.0" encoding="UTF-8" ?>'
    '<catalog xmlns="urn:catalog" xmlns:m="urn:media" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
    '<book id="b1" xsi:type="hardcover"><title>Learning   XML</title>'
    '<m:cover m:format="png"/>'
    "<notes><![CDATA[  keep   <this>  as is  ]]></notes></book></catalog>"
)

CDATA_SECTION = "<![CDATA[  keep   <this>  as is  ]]>"


def parse(document):
    """Parse a document with lxml."""
    return etree.fromstring(document.encode("utf-8"))


def structure(element):
    """Namespace-prefix independent view of an element tree."""
    children = [child for child in element if isinstance(child.tag, str)]
    return (
        element.tag,
        sorted(element.attrib.items()),
        (element.text or "").strip(),
        [structure(child) for child in children],
        (element.tail or "").strip(),
    )


class TestSpecifiedExamples:
    """Test the documented minification examples."""

    def test_whitespace_only_content(self):
        """Test collapsing an element with whitespace-only content."""
        assert minify("<a>  </a>") == "<a/>"

    def test_remove_comments(self):
        """Test removing a leading comment."""
        assert minify("<!-- x --><a/>", {"removeComments": True}) == "<a/>"

    def test_remove_unused_namespace(self):
        """Test removing an unused namespace declaration."""
        options = {"removeUnusedNamespaces": True}
        assert minify("<a xmlns:foo='urn:x'><b/></a>", options) == "<a><b/></a>"

    def test_shorten_namespace(self):
        """Test shortening a namespace prefix."""
        options = {"shortenNamespaces": True}
        assert minify("<a xmlns:alpha='urn:x'><alpha:b/></a>", options) == (
            "<a xmlns:a='urn:x'><a:b/></a>"
        )

    def test_prolog(self):
        """Test the standalone declaration and prolog whitespace."""
        options = {
            "removeUnnecessaryStandaloneDeclaration": True,
            "collapseWhitespaceInProlog": True,
        }
        document = '<?xml  version = "1.0"  standalone = "yes" ?><a/>'
        assert minify(document, options) == '<?xml version="1.0" ?><a/>'


class TestMinify:
    """Test the level 1 minify function."""

    def test_catalog(self):
        """Test a document exercising most passes."""
        assert minify(CATALOG) == CATALOG_MINIFIED

    def test_result_is_well_formed_and_equivalent(self):
        """Test that minification keeps the document meaning."""
        minified = minify(CATALOG)
        assert structure(parse(minified)) == structure(parse(CATALOG))

    @pytest.mark.parametrize("document", [
        CATALOG,
        "<a>  </a>",
        "<a xmlns:alpha='urn:x'><alpha:b/></a>",
        '<?xml  version = "1.0"  standalone = "yes" ?><a/>',
    ])
    def test_idempotent(self, document):
        """Test that minifying twice gives the same result."""
        once = minify(document)
        assert minify(once) == once

    def test_all_passes_disabled(self):
        """Test that disabling everything only trims the document edges."""
        assert minify(CATALOG, MinifyOptions.disabled()) == CATALOG.strip()

    @pytest.mark.parametrize("preset", ["balanced", "conservative", "aggressive"])
    def test_cdata_is_untouched(self, preset):
        """Test that CDATA content survives every preset."""
        minified = minify(CATALOG, MinifyOptions.preset(preset))
        assert CDATA_SECTION in minified
        parse(minified)

    def test_ignore_cdata_disabled(self):
        """Test that CDATA content is rewritten when not ignored."""
        document = "<a><![CDATA[<b>  </b>]]></a>"
        assert minify(document) == document
        assert minify(document, {"ignoreCData": False}) == "<a><![CDATA[<b/>]]></a>"

    def test_no_cdata_skips_guard(self):
        """Test that documents without CDATA never build a guard."""
        with patch("minify_xml.patterns.matching.CDataGuard") as guard:
            assert minify("<a>  <b> </b> </a>") == "<a><b/></a>"
        guard.assert_not_called()

    def test_strict_whitespace_removal(self):
        """Test the strict variant keeps whitespace next to the prolog."""
        document = '<?xml version="1.0"?>\n<a>\n  <b/>\n</a>'
        assert minify(document, {"removeWhitespaceBetweenTags": "strict"}) == (
            '<?xml version="1.0"?>\n<a><b/></a>'
        )

    def test_trim_texts_with_snake_case_options(self):
        """Test option mappings with field names."""
        assert minify(" <a> x </a> ", {"trim_whitespace_from_texts": True}) == "<a>x</a>"

    def test_edges_are_trimmed(self):
        """Test removing byte order marks and no-break spaces at the edges."""
        assert minify("\ufeff\xa0 <a/>\n\xa0") == "<a/>"
        assert trim_document("\ufeff <a/> ") == "<a/>"

    def test_empty_document(self):
        """Test minifying an empty string."""
        assert minify("") == ""

    def test_rejects_bytes(self):
        """Test that documents must be text."""
        with pytest.raises(TypeError):
            minify(b"<a/>")

    def test_rejects_unknown_option(self):
        """Test that unknown option names are reported."""
        with pytest.raises(ConfigValidationError):
            minify("<a/>", {"removeEverything": True})

    def test_logs_with_correlation_id(self, caplog):
        """Test that log records carry the correlation ID."""
        with caplog.at_level(logging.DEBUG, logger="minify_xml"):
            minify("<a>  </a>", correlation_id="req-7")

        records = [
            record for record in caplog.records
            if record.name == "minify_xml.api.minifier"
        ]
        assert records
        assert all(record.correlation_id == "req-7" for record in records)
        assert any(
            getattr(record, "pass", None) == "collapse_empty_elements"
            for record in records
        )


class TestXMLMinifier:
    """Test the level 2 configured minifier."""

    def test_uses_configured_options(self):
        """Test that constructor options apply to every call."""
        minifier = XMLMinifier({"collapseWhitespaceInTexts": True})
        assert minifier.minify("<a>x   y</a>") == "<a>x y</a>"

    def test_options_override(self):
        """Test per-call option overrides."""
        minifier = XMLMinifier()
        assert minifier.minify("<a>  </a>", MinifyOptions.disabled()) == "<a>  </a>"
        assert minifier.minify("<a>  </a>") == "<a/>"

    def test_report(self):
        """Test the per-pass report."""
        result = XMLMinifier(correlation_id="req-1").minify_with_report("<a>  </a>")
        assert isinstance(result, MinifyResult)
        assert result.text == "<a/>"
        assert result.original_length == 9
        assert result.characters_saved == 5
        assert result.correlation_id == "req-1"
        assert [metrics.name for metrics in result.passes] == [
            minify_pass.name for minify_pass in PASSES
        ]
        assert "trim_whitespace_from_texts" not in result.applied_passes
        saved = {metrics.name: metrics.characters_saved for metrics in result.passes}
        assert saved["remove_whitespace_between_tags"] == 2
        assert saved["collapse_empty_elements"] == 3

    def test_statistics(self):
        """Test aggregate statistics."""
        minifier = XMLMinifier()
        minifier.minify("<a>  </a>")
        minifier.minify("<b/>")

        stats = minifier.statistics
        assert stats["minify_count"] == 2
        assert stats["characters_saved"] == 5
        assert stats["total_processing_time_ms"] >= 0
        assert stats["average_processing_time_ms"] == pytest.approx(
            stats["total_processing_time_ms"] / 2
        )

        minifier.reset_statistics()
        assert minifier.statistics["minify_count"] == 0
        assert minifier.statistics["average_processing_time_ms"] == 0.0

    def test_reconfigure(self):
        """Test changing options of an existing minifier."""
        minifier = XMLMinifier()
        minifier.reconfigure({"collapseEmptyElements": False})
        assert minifier.minify("<a>  </a>") == "<a></a>"
        minifier.reconfigure(collapse_empty_elements=True)
        assert minifier.minify("<a>  </a>") == "<a/>"

    def test_reconfigure_invalid(self):
        """Test that invalid reconfiguration keeps the previous options."""
        minifier = XMLMinifier()
        with pytest.raises(ConfigValidationError):
            minifier.reconfigure(remove_comments="sometimes")
        assert minifier.options == MinifyOptions()


class TestMinifyFile:
    """Test minifying files."""

    def test_minify_file(self, tmp_path):
        """Test minifying a UTF-8 file."""
        path = tmp_path / "catalog.xml"
        path.write_bytes(CATALOG.encode("utf-8"))

        result = minify_file(path)
        assert result.text == CATALOG_MINIFIED
        assert result.source == str(path)
        assert result.encoding == "utf-8"
        assert result.reduction_ratio > 0

    def test_minify_file_with_bom(self, tmp_path):
        """Test that the byte order mark is reported, not kept in the text."""
        path = tmp_path / "bom.xml"
        path.write_bytes(codecs.BOM_UTF8 + "<a>  ü </a>".encode("utf-8"))

        result = minify_file(str(path), {"trimWhitespaceFromTexts": True})
        assert result.text == "<a>ü</a>"
        assert result.encoding == "utf-8-sig"

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises."""
        with pytest.raises(OSError):
            minify_file(tmp_path / "missing.xml")
