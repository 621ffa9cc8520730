"""Test module for minify_xml package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import minify_xml

    # Assert
    assert minify_xml is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import minify_xml

    # Assert
    assert isinstance(minify_xml.__version__, str)
    assert minify_xml.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import minify_xml

    # Assert
    assert minify_xml.__author__ == "minify-xml developers"


def test_package_all_exports() -> None:
    """Test that __all__ lists the public API."""
    # Arrange & Act
    import minify_xml

    # Assert
    assert minify_xml.__all__[:2] == ["__author__", "__version__"]
    for name in ("minify", "minify_file", "XMLMinifier", "MinifyOptions", "ConfigError"):
        assert name in minify_xml.__all__
        assert hasattr(minify_xml, name)
