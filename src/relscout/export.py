"""Rendering of resolution results in the supported output formats."""

from __future__ import annotations

import csv
import io
import json
import xml.etree.ElementTree as ET
from typing import Callable, Dict, Iterable, List, Optional

import tomlkit
import yaml

from relscout.constants import OutputFormats
from relscout.versioning.models import ResolutionResult


def _as_mapping(results: List[ResolutionResult]) -> Dict[str, Optional[str]]:
    return {r.package: r.version for r in results}


def render_plain(results: List[ResolutionResult]) -> str:
    lines = [f"{r.package} {r.version}" if r.version else r.package for r in results]
    return "\n".join(lines) + ("\n" if lines else "")


def render_csv(results: List[ResolutionResult]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["package", "version"])
    for r in results:
        writer.writerow([r.package, r.version or ""])
    return buf.getvalue()


def render_json(results: List[ResolutionResult]) -> str:
    return json.dumps(_as_mapping(results), ensure_ascii=False, indent=4) + "\n"


def render_toml(results: List[ResolutionResult]) -> str:
    doc = tomlkit.document()
    for r in results:
        doc.add(r.package, r.version or "")
    return tomlkit.dumps(doc)


def render_xml(results: List[ResolutionResult]) -> str:
    root = ET.Element("packages")
    for r in results:
        node = ET.SubElement(root, "package", name=r.package)
        if r.version:
            node.text = r.version
    ET.indent(root)
    return ET.tostring(root, encoding="unicode") + "\n"


def render_yaml(results: List[ResolutionResult]) -> str:
    return yaml.safe_dump(_as_mapping(results), sort_keys=False, default_flow_style=False)


RENDERERS: Dict[str, Callable[[List[ResolutionResult]], str]] = {
    OutputFormats.PLAIN.value: render_plain,
    OutputFormats.CSV.value: render_csv,
    OutputFormats.JSON.value: render_json,
    OutputFormats.TOML.value: render_toml,
    OutputFormats.XML.value: render_xml,
    OutputFormats.YAML.value: render_yaml,
}


def render(results: Iterable[ResolutionResult], fmt: str = OutputFormats.PLAIN.value) -> str:
    """Render ``results`` in format ``fmt``.

    Raises:
        ValueError: For an unsupported format
    """
    try:
        renderer = RENDERERS[fmt.lower()]
    except KeyError as exc:
        raise ValueError(f"Unsupported output format: {fmt}") from exc
    return renderer(list(results))


def render_names(names: Iterable[str]) -> str:
    """One package name per line."""
    return render_plain([ResolutionResult(package=name, version=None) for name in names])
