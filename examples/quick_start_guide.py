#!/usr/bin/env python3
"""
Quick Start Guide for the XML minifier.

Walks through the one-call API, option presets and the configured minifier
with its per-pass report.
"""

from minify_xml import MinifyOptions, XMLMinifier, minify

CATALOG = """<?xml version = "1.0"  encoding="UTF-8"   standalone="yes" ?>
<!-- product catalog -->
<catalog  xmlns:unused="urn:unused"  xmlns:media="urn:media">
    <product  sku = "A-100" >
        <name>  Widget   Pro  </name>
        <media:image  media:src="widget.png" ></media:image>
        <description><![CDATA[  <b>Bold</b>   claims  ]]></description>
    </product>
</catalog>
"""


def quick_start_example():
    """Minify a document with the default options."""
    print("🚀 QUICK START - minify-xml")
    print("=" * 30)

    minified = minify(CATALOG)
    print(f"\n📄 {len(CATALOG)} -> {len(minified)} characters")
    print(minified)


def presets_example():
    """Compare the named option presets."""
    print("\n⚙️  Presets")
    print("-" * 30)

    for name in ("conservative", "balanced", "aggressive"):
        minified = minify(CATALOG, MinifyOptions.preset(name))
        print(f"{name:>12}: {len(minified)} characters")


def report_example():
    """Show which passes saved the most characters."""
    print("\n📊 Per-pass report")
    print("-" * 30)

    minifier = XMLMinifier({"trimWhitespaceFromTexts": True}, correlation_id="quick-start")
    result = minifier.minify_with_report(CATALOG)
    for metrics in result.passes:
        if metrics.applied and metrics.changed:
            print(f"{metrics.name:>42}: -{metrics.characters_saved}")
    print(f"Reduction: {result.reduction_ratio:.1%}")


def main():
    """Run all examples."""
    quick_start_example()
    presets_example()
    report_example()


if __name__ == "__main__":
    main()
