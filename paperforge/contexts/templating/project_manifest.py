"""
Project manifest: the JSON record binding a project directory to its template.

Written once by the Project Initializer; every later stage only reads it.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from paperforge.utils.timestamp import parse_timestamp

MANIFEST_FILENAME = ".research-project.json"


@dataclass
class ProjectManifest:
    name: str
    template_id: str
    template_source: str
    journal_target: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    last_modified: datetime = field(default_factory=datetime.now)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "template": {"id": self.template_id, "source": self.template_source},
            "journal_target": self.journal_target,
            "created_at": self.created_at.isoformat(),
            "last_modified": self.last_modified.isoformat(),
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectManifest":
        template = data.get("template") or {}
        return cls(
            name=data["name"],
            template_id=template.get("id", ""),
            template_source=template.get("source", ""),
            journal_target=data.get("journal_target"),
            created_at=parse_timestamp(data["created_at"]),
            last_modified=parse_timestamp(data["last_modified"]),
            metadata=dict(data.get("metadata") or {}),
        )


def manifest_path(project_path: Path) -> Path:
    return Path(project_path) / MANIFEST_FILENAME


def write_manifest(project_path: Path, manifest: ProjectManifest) -> Path:
    """Write the manifest into project_path and return its path."""
    path = manifest_path(project_path)
    path.write_text(json.dumps(manifest.to_dict(), indent=2), encoding="utf-8")
    return path


def load_manifest(project_path: Path) -> ProjectManifest:
    """
    Read the manifest of a project.

    Raises:
        FileNotFoundError: If the project has no manifest
        ValueError: If the manifest is not valid JSON or has bad timestamps
        KeyError: If a mandatory field is missing
    """
    data = json.loads(manifest_path(project_path).read_text(encoding="utf-8"))
    return ProjectManifest.from_dict(data)
