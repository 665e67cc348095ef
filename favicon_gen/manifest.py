"""Web app manifest composition."""

import json

ICON_MIME_TYPE = "image/png"


def icon_entry(src, size):
    return {"src": src, "type": ICON_MIME_TYPE, "sizes": f"{size}x{size}"}


def compose(base_data, google_home_path, google_load_path, home_size=192, load_size=512):
    """
    Merge caller-supplied manifest fields with the generated icon entries.

    Any ``icons`` key in ``base_data`` is replaced; every other key is kept
    as given.

    Args:
        base_data: Manifest fields supplied by the caller (name, colors...)
        google_home_path: Path of the home screen icon
        google_load_path: Path of the splash screen icon

    Returns:
        dict: The manifest document
    """
    manifest = dict(base_data or {})
    manifest["icons"] = [
        icon_entry(google_home_path, home_size),
        icon_entry(google_load_path, load_size),
    ]
    return manifest


def dumps(manifest):
    """Serialize a manifest as compact JSON text."""
    return json.dumps(manifest, ensure_ascii=False, separators=(",", ":"))
