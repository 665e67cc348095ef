"""
Generation options.

Options are an immutable value built from the defaults plus whatever partial
overrides a caller hands in. Option names may be given in snake_case or in
the camelCase used by site configuration files.
"""

import copy
import json
from dataclasses import dataclass, field, fields, replace


# camelCase name -> attribute name
OPTION_ALIASES = {
    "appleIconBgColor": "apple_icon_bg_color",
    "appleIconPadding": "apple_icon_padding",
    "manifestData": "manifest_data",
    "generateManifest": "generate_manifest",
    "skipCache": "skip_cache",
}


@dataclass(frozen=True)
class GenerationOptions:
    apple_icon_bg_color: str = "white"
    apple_icon_padding: int = 20
    manifest_data: dict = field(default_factory=dict)
    generate_manifest: bool = True
    skip_cache: bool = False

    def with_overrides(self, overrides=None, **kwargs):
        """
        Return a copy of these options with the given fields replaced.

        Args:
            overrides: Mapping of option name to value (snake_case or camelCase)
            **kwargs: Further overrides, applied after ``overrides``

        Returns:
            GenerationOptions: A new, fully populated options value

        Raises:
            TypeError: If an option name is not recognised
        """
        merged = {}
        for source in (overrides or {}, kwargs):
            for name, value in source.items():
                merged[normalize_option_name(name)] = value

        if "manifest_data" in merged:
            merged["manifest_data"] = copy.deepcopy(merged["manifest_data"] or {})
        return replace(self, **merged)

    def fingerprint(self):
        """Canonical serialized form, used to compare options structurally."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return json.dumps(values, sort_keys=True, separators=(",", ":"), default=repr)


def normalize_option_name(name):
    name = OPTION_ALIASES.get(name, name)
    if name not in {f.name for f in fields(GenerationOptions)}:
        raise TypeError(f"unknown favicon option: {name!r}")
    return name


def resolve_options(overrides=None, base=None):
    """Overlay ``overrides`` on ``base`` (or the defaults)."""
    if isinstance(overrides, GenerationOptions):
        return overrides
    return (base or GenerationOptions()).with_overrides(overrides)
