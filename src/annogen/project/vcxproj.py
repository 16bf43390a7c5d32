"""Input discovery from MSBuild project files and directories."""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from annogen.core.languages import is_header_file, is_supported_file

logger = logging.getLogger(__name__)


class ProjectError(ValueError):
    pass


@dataclass(frozen=True)
class VcxProject:
    path: Path
    headers: list[Path] = field(default_factory=list)
    sources: list[Path] = field(default_factory=list)

    @property
    def root(self) -> Path:
        return self.path.parent


def _items(root: ET.Element, item: str, base: Path) -> list[Path]:
    paths: list[Path] = []
    # {*} matches the MSBuild namespace as well as un-namespaced files.
    for element in root.iterfind(f"{{*}}ItemGroup/{{*}}{item}"):
        include = element.get("Include")
        if include:
            paths.append(base / include.replace("\\", "/"))
    return paths


def load_project(path: str | Path) -> VcxProject:
    project_path = Path(path)
    if project_path.suffix.lower() != ".vcxproj":
        raise ProjectError(f"{project_path} is not a .vcxproj project file")
    if not project_path.is_file():
        raise ProjectError(f"Project file not found: {project_path}")

    try:
        root = ET.parse(project_path).getroot()
    except ET.ParseError as exc:
        raise ProjectError(f"Malformed project file {project_path}: {exc}") from exc

    base = project_path.parent
    project = VcxProject(
        path=project_path,
        headers=_items(root, "ClInclude", base),
        sources=_items(root, "ClCompile", base),
    )
    logger.info("Project %s lists %d header(s)", project_path, len(project.headers))
    return project


def discover_inputs(path: str | Path) -> list[Path]:
    """Return the input units for a project file, a directory, or a single source file."""
    target = Path(path)
    if target.suffix.lower() == ".vcxproj":
        return load_project(target).headers
    if target.is_dir():
        return sorted(p for p in target.rglob("*") if p.is_file() and is_header_file(p))
    if target.is_file() and is_supported_file(target):
        return [target]
    raise ProjectError(f"{target} is not a .vcxproj file, a directory or a C/C++ source file")
