from dev_studio_mcp.models.session import ShellSession


def resolve_path(session: ShellSession, path_str: str) -> str:
    """
    Resolves a user-provided path against the session's current directory.

    Absolute paths are used as-is. Relative paths are joined to the current
    directory with a single slash.
    """
    if path_str.startswith("/"):
        return path_str
    if session.current_directory == "/":
        return "/" + path_str
    return f"{session.current_directory}/{path_str}"


def normalize_path(path_str: str) -> str:
    """Collapses duplicate slashes and `.`/`..` segments. `..` never climbs above the root."""
    segments: list[str] = []
    for segment in path_str.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return "/" + "/".join(segments)


def to_project_path(path_str: str) -> str:
    """Maps an absolute virtual path to a project file key."""
    return normalize_path(path_str).lstrip("/")


def resolve_project_path(session: ShellSession, path_str: str) -> str:
    return to_project_path(resolve_path(session, path_str))
