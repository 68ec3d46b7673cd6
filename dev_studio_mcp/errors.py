"""Exceptions shared across the dev studio services."""


class DevStudioError(Exception):
    """Base class for all dev studio errors."""


class NotFoundError(DevStudioError):
    pass


class ProjectNotFoundError(NotFoundError):
    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class FileNotFoundInProjectError(NotFoundError):
    def __init__(self, project_id: str, path: str) -> None:
        super().__init__(f"File not found: {path}")
        self.project_id = project_id
        self.path = path


class ManifestError(DevStudioError):
    """Raised when a project's package.json cannot be parsed or updated."""


class VFSNotInitializedError(DevStudioError):
    def __init__(self) -> None:
        super().__init__("VirtualFileSystem.initialize() must be called before use.")
