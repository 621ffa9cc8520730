"""Configuration for XML minification.

This module provides the immutable options record that controls which
minification passes run, together with named presets, mapping/JSON loading
and strict type validation of every flag.
"""

import difflib
import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

STRICT = "strict"

# Option value accepted by the three text/whitespace flags
TriState = Union[bool, str]

TRI_STATE_FIELDS = frozenset({
    "remove_whitespace_between_tags",
    "trim_whitespace_from_texts",
    "collapse_whitespace_in_texts",
})

# Option names as used by JavaScript-style configuration objects
CAMEL_CASE_NAMES: Dict[str, str] = {
    "removeComments": "remove_comments",
    "removeWhitespaceBetweenTags": "remove_whitespace_between_tags",
    "considerPreserveWhitespace": "consider_preserve_whitespace",
    "collapseWhitespaceInTags": "collapse_whitespace_in_tags",
    "collapseEmptyElements": "collapse_empty_elements",
    "trimWhitespaceFromTexts": "trim_whitespace_from_texts",
    "collapseWhitespaceInTexts": "collapse_whitespace_in_texts",
    "collapseWhitespaceInProlog": "collapse_whitespace_in_prolog",
    "collapseWhitespaceInDocType": "collapse_whitespace_in_doc_type",
    "removeSchemaLocationAttributes": "remove_schema_location_attributes",
    "removeUnnecessaryStandaloneDeclaration": "remove_unnecessary_standalone_declaration",
    "removeUnusedNamespaces": "remove_unused_namespaces",
    "removeUnusedDefaultNamespace": "remove_unused_default_namespace",
    "shortenNamespaces": "shorten_namespaces",
    "ignoreCData": "ignore_cdata",
}

SNAKE_CASE_NAMES: Dict[str, str] = {
    snake: camel for camel, snake in CAMEL_CASE_NAMES.items()
}

PRESETS = ("balanced", "conservative", "aggressive", "disabled")


class ConfigError(ValueError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


def is_strict(value: TriState) -> bool:
    """Return True if a tri-state option selects the strict variant."""
    return value == STRICT


@dataclass(frozen=True)
class MinifyOptions:
    """Options selecting the minification passes to apply.

    Every flag is a boolean except ``remove_whitespace_between_tags``,
    ``trim_whitespace_from_texts`` and ``collapse_whitespace_in_texts``, which
    also accept ``"strict"``. Strict scoping does not treat the prolog,
    processing instructions, the DOCTYPE, CDATA sections or comments as tags.

    Instances are immutable; use :meth:`merged` to derive a modified copy.
    """

    remove_comments: bool = True
    remove_whitespace_between_tags: TriState = True
    consider_preserve_whitespace: bool = True
    collapse_whitespace_in_tags: bool = True
    collapse_empty_elements: bool = True
    trim_whitespace_from_texts: TriState = False
    collapse_whitespace_in_texts: TriState = False
    collapse_whitespace_in_prolog: bool = True
    collapse_whitespace_in_doc_type: bool = True
    remove_schema_location_attributes: bool = False
    remove_unnecessary_standalone_declaration: bool = True
    remove_unused_namespaces: bool = True
    remove_unused_default_namespace: bool = True
    shorten_namespaces: bool = True
    ignore_cdata: bool = True

    def __post_init__(self) -> None:
        """Validate option value types."""
        for option in fields(self):
            value = getattr(self, option.name)
            if option.name in TRI_STATE_FIELDS:
                if not (isinstance(value, bool) or value == STRICT):
                    raise ConfigValidationError(
                        f"{option.name} must be True, False or '{STRICT}', "
                        f"got {value!r}",
                        field_name=option.name,
                    )
            elif not isinstance(value, bool):
                raise ConfigValidationError(
                    f"{option.name} must be a boolean, got {value!r}",
                    field_name=option.name,
                )

    @property
    def namespaces_enabled(self) -> bool:
        """Whether any of the namespace phases is enabled."""
        return (
            self.remove_unused_namespaces
            or self.remove_unused_default_namespace
            or self.shorten_namespaces
        )

    @classmethod
    def balanced(cls) -> "MinifyOptions":
        """Create the default option set."""
        return cls()

    @classmethod
    def conservative(cls) -> "MinifyOptions":
        """Create options that only drop comments and inter-element whitespace."""
        return cls.disabled().merged(
            remove_comments=True,
            remove_whitespace_between_tags=STRICT,
            consider_preserve_whitespace=True,
            ignore_cdata=True,
        )

    @classmethod
    def aggressive(cls) -> "MinifyOptions":
        """Create options with every pass enabled."""
        return cls(
            trim_whitespace_from_texts=True,
            collapse_whitespace_in_texts=True,
            remove_schema_location_attributes=True,
        )

    @classmethod
    def disabled(cls) -> "MinifyOptions":
        """Create options with every pass disabled."""
        return cls(**{option.name: False for option in fields(cls)})

    @classmethod
    def preset(cls, name: str) -> "MinifyOptions":
        """Create options from a preset name."""
        if name not in PRESETS:
            raise ConfigValidationError(
                f"Unknown preset: {name!r}",
                field_name="preset",
                suggestions=difflib.get_close_matches(name, PRESETS),
            )
        return getattr(cls, name)()

    def merged(self, overrides: Optional[Mapping[str, Any]] = None,
               **kwargs: Any) -> "MinifyOptions":
        """Return a copy with the given options replaced.

        Args:
            overrides: Mapping of option names (snake_case or camelCase)
            **kwargs: Additional snake_case overrides

        Returns:
            New MinifyOptions instance
        """
        changes = _normalize_keys(dict(overrides or {}))
        changes.update(_normalize_keys(kwargs))
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any],
                     base: Optional["MinifyOptions"] = None) -> "MinifyOptions":
        """Create options by merging a mapping onto a base option set.

        A ``"preset"`` key selects the base instead of ``base`` (defaults when
        neither is given).
        """
        data = dict(data)
        if "preset" in data:
            base = cls.preset(data.pop("preset"))
        return (base or cls()).merged(data)

    @classmethod
    def from_json(cls, json_str: str,
                  base: Optional["MinifyOptions"] = None) -> "MinifyOptions":
        """Create options from a JSON object string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid options JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Options JSON must be an object")
        return cls.from_mapping(data, base)

    @classmethod
    def from_file(cls, path: Union[str, Path],
                  base: Optional["MinifyOptions"] = None) -> "MinifyOptions":
        """Load options from a JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"), base)

    def to_dict(self, camel_case: bool = False) -> Dict[str, TriState]:
        """Convert options to a dictionary.

        Args:
            camel_case: Use camelCase option names

        Returns:
            Dictionary of option names to values
        """
        result = asdict(self)
        if camel_case:
            return {SNAKE_CASE_NAMES[name]: value for name, value in result.items()}
        return result

    def to_json(self, indent: int = 2, camel_case: bool = True) -> str:
        """Convert options to a JSON string."""
        return json.dumps(self.to_dict(camel_case=camel_case), indent=indent)


def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase keys to field names and reject unknown options."""
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        name = CAMEL_CASE_NAMES.get(key, key)
        if name not in SNAKE_CASE_NAMES:
            known = list(SNAKE_CASE_NAMES) + list(CAMEL_CASE_NAMES)
            raise ConfigValidationError(
                f"Unknown option: {key!r}",
                field_name=key,
                suggestions=difflib.get_close_matches(key, known),
            )
        normalized[name] = value
    return normalized


def resolve_options(
    options: Union["MinifyOptions", Mapping[str, Any], None]
) -> MinifyOptions:
    """Merge caller supplied options onto the defaults.

    Args:
        options: MinifyOptions instance, mapping of overrides or None

    Returns:
        Effective MinifyOptions
    """
    if options is None:
        return MinifyOptions()
    if isinstance(options, MinifyOptions):
        return options
    if isinstance(options, Mapping):
        return MinifyOptions.from_mapping(options)
    raise ConfigValidationError(
        f"Options must be MinifyOptions, a mapping or None, "
        f"got {type(options).__name__}"
    )
