"""Version numbers and download URLs for a release run."""

from __future__ import annotations

from urllib.parse import urlsplit

__all__ = ["box_filename", "bump_patch", "compute_current_version", "render_url"]


def compute_current_version(active: str | None, major: str) -> str:
    """Version to publish in this run.

    The active version is kept while it belongs to the configured major line
    (``"1.0.3"`` under ``"1.0"``). A new or changed line restarts at
    ``<major>.0``. Advancing the patch is a separate, explicit step.
    """
    if active is None:
        return f"{major}.0"

    if len(active) > len(major) and active.startswith(f"{major}."):
        return active

    return f"{major}.0"


def bump_patch(version: str) -> str:
    """Increment the last dot-separated component: ``1.0.3`` -> ``1.0.4``.

    Raises:
        ValueError: The last component is not an integer.
    """
    parts = version.split(".")
    parts[-1] = str(int(parts[-1]) + 1)
    return ".".join(parts)


def render_url(template: str, *, name: str, version: str, provider: str) -> str:
    """Substitute ``{name}``, ``{version}`` and ``{provider}`` in ``template``.

    Plain substring replacement: the ``{{name}}`` form is handled first so it
    does not leave stray braces behind, unknown placeholders are kept as-is.
    """
    values = {"name": name, "version": version, "provider": provider}
    url = template
    for key, value in values.items():
        url = url.replace("{{" + key + "}}", value)
    for key, value in values.items():
        url = url.replace("{" + key + "}", value)
    return url


def box_filename(url: str, *, name: str, version: str, provider: str) -> str:
    """File name the packaged box is published under.

    This is the last path segment of the download URL, so the uploaded file
    matches what the catalog points at.
    """
    segment = urlsplit(url).path.rsplit("/", 1)[-1]
    if segment:
        return segment
    return f"{name}-{version}-{provider}.box".replace("/", "-")
