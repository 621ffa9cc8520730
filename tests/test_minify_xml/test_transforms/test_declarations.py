"""Tests for prolog and DOCTYPE passes."""

from minify_xml.transforms.declarations import (
    collapse_whitespace_in_doc_type,
    collapse_whitespace_in_prolog,
    has_unnecessary_standalone,
    minify_internal_subset,
    remove_unnecessary_standalone_declaration,
)

PROLOG = '<?xml version="1.0" standalone="yes"?>'


class TestStandaloneDeclaration:
    """Test removal of the standalone declaration."""

    def test_unnecessary_without_doctype(self):
        """Test that the declaration is removed without a DOCTYPE."""
        assert has_unnecessary_standalone(PROLOG + "<a/>")
        assert remove_unnecessary_standalone_declaration(PROLOG + "<a/>") == (
            '<?xml version="1.0"?><a/>'
        )

    def test_unnecessary_with_internal_subset(self):
        """Test that a plain internal subset does not need the declaration."""
        document = PROLOG + '<!DOCTYPE a [<!ENTITY e "x">]><a/>'
        assert has_unnecessary_standalone(document)

    def test_needed_with_external_subset(self):
        """Test that SYSTEM and PUBLIC identifiers keep the declaration."""
        system = PROLOG + '<!DOCTYPE a SYSTEM "a.dtd"><a/>'
        public = PROLOG + '<!DOCTYPE a PUBLIC "-//A//EN" "a.dtd"><a/>'
        assert remove_unnecessary_standalone_declaration(system) == system
        assert remove_unnecessary_standalone_declaration(public) == public

    def test_needed_with_parameter_entity(self):
        """Test that parameter entities keep the declaration."""
        document = PROLOG + '<!DOCTYPE a [<!ENTITY % p "x">]><a/>'
        assert not has_unnecessary_standalone(document)
        assert remove_unnecessary_standalone_declaration(document) == document

    def test_single_quotes_and_no(self):
        """Test other spellings of the declaration."""
        document = "<?xml version='1.0' standalone = 'no' ?><a/>"
        assert remove_unnecessary_standalone_declaration(document) == (
            "<?xml version='1.0' ?><a/>"
        )

    def test_attribute_named_standalone_is_kept(self):
        """Test that element attributes are not touched."""
        document = '<a standalone="yes"/>'
        assert remove_unnecessary_standalone_declaration(document) == document


class TestCollapseWhitespaceInProlog:
    """Test prolog whitespace collapsing."""

    def test_collapses_whitespace(self):
        """Test collapsing whitespace around attributes."""
        document = '<?xml  version = "1.0"\n  encoding="UTF-8"  ?><a  b="1"/>'
        assert collapse_whitespace_in_prolog(document) == (
            '<?xml version="1.0" encoding="UTF-8" ?><a  b="1"/>'
        )

    def test_without_trailing_whitespace(self):
        """Test a prolog without whitespace before the closing bracket."""
        document = '<?xml version="1.0"?><a/>'
        assert collapse_whitespace_in_prolog(document) == document


class TestCollapseWhitespaceInDocType:
    """Test DOCTYPE whitespace collapsing."""

    def test_name_only(self):
        """Test a DOCTYPE with just a name."""
        assert collapse_whitespace_in_doc_type("<!DOCTYPE  a  ><a/>") == "<!DOCTYPE a><a/>"

    def test_external_identifiers(self):
        """Test collapsing around external identifiers."""
        document = '<!DOCTYPE\n html   PUBLIC  "-//W3C//DTD XHTML 1.0//EN"\n  "x.dtd" ><html/>'
        assert collapse_whitespace_in_doc_type(document) == (
            '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0//EN" "x.dtd"><html/>'
        )

    def test_internal_subset(self):
        """Test minifying the internal subset."""
        document = (
            '<!DOCTYPE note [\n  <!-- entities -->\n  <!ENTITY  a  "b">\n'
            '  <!ELEMENT note (#PCDATA)>\n]><note/>'
        )
        assert collapse_whitespace_in_doc_type(document) == (
            '<!DOCTYPE note[<!ENTITY a "b"><!ELEMENT note (#PCDATA)>]><note/>'
        )

    def test_empty_internal_subset_is_dropped(self):
        """Test that a whitespace-only subset disappears."""
        assert collapse_whitespace_in_doc_type("<!DOCTYPE a [  ]><a/>") == "<!DOCTYPE a><a/>"

    def test_only_first_doctype(self):
        """Test that only the first DOCTYPE is rewritten."""
        document = "<!DOCTYPE  a><a><![CDATA[<!DOCTYPE  b>]]></a>"
        assert collapse_whitespace_in_doc_type(document) == (
            "<!DOCTYPE a><a><![CDATA[<!DOCTYPE  b>]]></a>"
        )


class TestMinifyInternalSubset:
    """Test internal subset minification."""

    def test_strips_comments_and_whitespace(self):
        """Test removing comments and inter-declaration whitespace."""
        subset = ' <!ENTITY a "b">  <!-- c -->\n<!ENTITY d "e"> '
        assert minify_internal_subset(subset) == '<!ENTITY a "b"><!ENTITY d "e">'

    def test_quoted_whitespace_is_collapsed(self):
        """Test that whitespace runs collapse everywhere in the subset."""
        assert minify_internal_subset('<!ENTITY a "x   y">') == '<!ENTITY a "x y">'
