"""HTML <link> tags for a generated favicon set."""


def render(files):
    """
    Render the head fragment referencing the generated assets.

    The icon and apple-touch-icon links are always present; the SVG and
    manifest links only when ``files`` has ``svg`` / ``manifest`` entries.
    """
    html = "\n"
    html += f'<link rel="icon" href="{files["ico"]}" sizes="any">\n'
    if "svg" in files:
        html += f'<link rel="icon" href="{files["svg"]}" type="image/svg+xml">\n'
    html += f'<link rel="apple-touch-icon" href="{files["apple"]}">\n'
    if "manifest" in files:
        html += f'<link rel="manifest" href="{files["manifest"]}">\n'
    return html
