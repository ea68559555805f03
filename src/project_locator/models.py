from __future__ import annotations

import json
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import CacheError


class DirInfo(BaseModel):
    """A discovered project directory."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    full_path: str = Field(..., alias="fullPath", description="Absolute path of the project root")
    name: str = Field(..., description="Display name")


DirList = list[DirInfo]


class Project(BaseModel):
    """Project record handed to the host when a root path is recognised."""

    model_config = ConfigDict(populate_by_name=True)

    root_path: str = Field(..., alias="rootPath")
    name: str
    group: str = ""
    paths: list[str] = Field(default_factory=list)

    @classmethod
    def from_dir_info(cls, info: DirInfo) -> Project:
        return cls(root_path=info.full_path, name=info.name)


_DIR_LIST_ADAPTER = TypeAdapter(list[DirInfo])


def dir_list_to_json(dirs: Sequence[DirInfo]) -> str:
    """Serialize for the cache file: a tab-indented array of {fullPath, name}."""
    payload = [info.model_dump(by_alias=True) for info in dirs]
    return json.dumps(payload, indent="\t", ensure_ascii=False)


def dir_list_from_json(text: str | bytes) -> DirList:
    try:
        return _DIR_LIST_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise CacheError(f"invalid projects cache ({exc.error_count()} errors)") from exc
