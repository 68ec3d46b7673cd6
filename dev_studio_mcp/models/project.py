from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

LANGUAGE_BY_EXTENSION = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "css": "css",
    "scss": "scss",
    "json": "json",
    "html": "html",
    "md": "markdown",
}


def utc_timestamp() -> str:
    """Returns the current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def file_extension(path: str) -> str:
    """Returns the text after the last dot of the path, or an empty string."""
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1]


def language_for_path(path: str) -> str:
    return LANGUAGE_BY_EXTENSION.get(file_extension(path), "plaintext")


class _CamelModel(BaseModel):
    # The persisted table uses camelCase keys (createdAt, lastModified).
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileRecord(_CamelModel):
    """A single file inside a project."""

    content: str = ""
    language: str = "plaintext"
    last_modified: str = Field(default_factory=utc_timestamp)


class Project(_CamelModel):
    """One coding workspace: a name, the template it started from, and its files."""

    id: str
    name: str
    template: str = ""
    files: dict[str, FileRecord] = Field(default_factory=dict)
    dependencies: set[str] = Field(default_factory=set)
    created_at: str = Field(default_factory=utc_timestamp)
    last_modified: str = Field(default_factory=utc_timestamp)
    owner: str | None = None

    def to_storage(self) -> dict:
        data = self.model_dump(mode="json", by_alias=True)
        data["dependencies"] = sorted(self.dependencies)
        return data
