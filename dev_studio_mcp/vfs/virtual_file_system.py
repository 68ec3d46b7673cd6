"""
In-memory table of projects with write-through persistence.

Every mutation updates the in-memory table first and then saves the whole
table through the injected FileStore. Persistence failures are logged and
leave the service in a degraded state; they are never raised to callers.
"""

import logging
import random
import string
import time

from pydantic import ValidationError

from dev_studio_mcp.errors import (
    FileNotFoundInProjectError,
    ProjectNotFoundError,
    VFSNotInitializedError,
)
from dev_studio_mcp.models.project import (
    FileRecord,
    Project,
    file_extension,
    language_for_path,
    utc_timestamp,
)
from dev_studio_mcp.storage.file_store import FileStore
from dev_studio_mcp.vfs import manifest
from dev_studio_mcp.vfs.templates import (
    PLACEHOLDER_CONTENT,
    template_dependencies,
    template_files,
)

logger = logging.getLogger(__name__)


def generate_project_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"project_{int(time.time() * 1000)}_{suffix}"


def normalize_file_path(path: str) -> str:
    """Project file keys never carry a leading slash."""
    return path.lstrip("/")


class VirtualFileSystem:
    """CRUD over projects and their files, backed by a FileStore."""

    def __init__(self, store: FileStore, owner: str | None = None) -> None:
        self._store = store
        self._owner = owner
        self._projects: dict[str, Project] = {}
        self._initialized = False
        self.last_persistence_error: Exception | None = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def degraded(self) -> bool:
        """True when the most recent save did not reach durable storage."""
        return self.last_persistence_error is not None

    async def initialize(self) -> None:
        """Load the persisted table. Missing or corrupt storage starts empty."""
        self._projects = {}
        try:
            table = await self._store.load()
        except Exception as e:
            logger.error(f"Error loading projects, starting with an empty table: {e}")
            table = None

        if table is not None and not isinstance(table, dict):
            logger.error(f"Persisted project table has unexpected type {type(table).__name__}, ignoring it")
            table = None

        for project_id, raw in (table or {}).items():
            try:
                project = Project.model_validate(raw)
            except ValidationError as e:
                logger.error(f"Persisted project table is malformed ({project_id}), starting empty: {e}")
                self._projects = {}
                break
            # The language is always derived from the path, never trusted from storage.
            for path, record in project.files.items():
                record.language = language_for_path(path)
            self._projects[project_id] = project

        self._initialized = True
        logger.info(f"Loaded {len(self._projects)} project(s)")

    async def create_project(self, name: str, template: str = "react") -> Project:
        self._ensure_initialized()
        project_id = generate_project_id()
        while project_id in self._projects:
            project_id = generate_project_id()

        now = utc_timestamp()
        files = {
            path: FileRecord(content=content, language=language_for_path(path), last_modified=now)
            for path, content in template_files(template).items()
        }
        project = Project(
            id=project_id,
            name=name,
            template=template,
            files=files,
            dependencies=template_dependencies(template),
            created_at=now,
            last_modified=now,
            owner=self._owner,
        )
        self._projects[project_id] = project
        logger.info(f"Created project {project_id} ({name!r}, template={template!r})")
        await self._save_projects()
        return project

    async def get_project(self, project_id: str) -> Project:
        return self._require_project(project_id)

    async def get_all_projects(self) -> list[Project]:
        self._ensure_initialized()
        return list(self._projects.values())

    async def rename_project(self, project_id: str, name: str) -> Project:
        project = self._require_project(project_id)
        project.name = name
        project.last_modified = utc_timestamp()
        await self._save_projects()
        return project

    async def fork_project(self, project_id: str, name: str | None = None) -> Project:
        """Create a new project holding a copy of every file of an existing one."""
        source = self._require_project(project_id)
        fork = await self.create_project(f"{name or source.name} (Fork)", source.template)
        fork.dependencies |= source.dependencies
        for path, record in source.files.items():
            await self.save_file(fork.id, path, record.content)
        return fork

    async def delete_project(self, project_id: str) -> None:
        self._ensure_initialized()
        if self._projects.pop(project_id, None) is not None:
            logger.info(f"Deleted project {project_id}")
        await self._save_projects()

    async def save_file(self, project_id: str, path: str, content: str) -> FileRecord:
        project = self._require_project(project_id)
        path = normalize_file_path(path)
        now = utc_timestamp()
        record = FileRecord(content=content, language=language_for_path(path), last_modified=now)
        project.files[path] = record
        project.last_modified = now
        logger.debug(f"Saved {path} in {project_id}, content length: {len(content)}")
        await self._save_projects()
        return record

    async def create_file(self, project_id: str, path: str) -> FileRecord:
        content = PLACEHOLDER_CONTENT.get(file_extension(path), "")
        return await self.save_file(project_id, path, content)

    async def read_file(self, project_id: str, path: str) -> str:
        project = self._require_project(project_id)
        record = project.files.get(normalize_file_path(path))
        if record is None:
            raise FileNotFoundInProjectError(project_id, path)
        return record.content

    async def delete_file(self, project_id: str, path: str) -> None:
        project = self._require_project(project_id)
        if project.files.pop(normalize_file_path(path), None) is not None:
            logger.debug(f"Deleted {path} from {project_id}")
        project.last_modified = utc_timestamp()
        await self._save_projects()

    async def install_package(self, project_id: str, name: str, version: str = "latest") -> None:
        """Record a dependency in the project's manifest. Nothing is fetched."""
        project = self._require_project(project_id)
        record = project.files.get(manifest.MANIFEST_PATH)
        data = manifest.load_manifest(record.content if record else None)
        manifest.set_dependency(data, name, version)
        project.dependencies.add(name)
        await self.save_file(project_id, manifest.MANIFEST_PATH, manifest.dump_manifest(data))
        logger.info(f"Installed {name}@{version} into {project_id}")

    async def get_installed_packages(self, project_id: str) -> list[tuple[str, str]]:
        project = self._require_project(project_id)
        record = project.files.get(manifest.MANIFEST_PATH)
        return manifest.list_dependencies(manifest.load_manifest(record.content if record else None))

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise VFSNotInitializedError()

    def _require_project(self, project_id: str) -> Project:
        self._ensure_initialized()
        project = self._projects.get(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def _save_projects(self) -> None:
        table = {project_id: project.to_storage() for project_id, project in self._projects.items()}
        try:
            await self._store.save(table)
            self.last_persistence_error = None
        except Exception as e:
            # In-memory state stays authoritative; changes are lost if the process ends.
            logger.error(f"Error saving projects: {e}")
            self.last_persistence_error = e
