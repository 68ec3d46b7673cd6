from pydantic import BaseModel, Field

DEFAULT_ENVIRONMENT = {
    "USER": "developer",
    "HOME": "/",
    "PATH": "/usr/local/bin:/usr/bin:/bin",
    "NODE_ENV": "development",
}

DEFAULT_PACKAGES = {"react", "react-dom"}


class ShellSession(BaseModel):
    """Stores the state of a single open terminal."""

    current_directory: str = "/"
    environment: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ENVIRONMENT))
    history: list[str] = Field(default_factory=list)
    installed_packages: set[str] = Field(default_factory=lambda: set(DEFAULT_PACKAGES))
    history_index: int = -1  # -1 means "not browsing history"

    def model_post_init(self, __context) -> None:
        if not self.current_directory.startswith("/"):
            self.current_directory = "/" + self.current_directory

    def record(self, command: str) -> None:
        self.history.append(command)
        self.history_index = -1

    def previous_command(self) -> str:
        """Moves the history cursor one entry back (the "up" key)."""
        if not self.history:
            return ""
        if self.history_index == -1:
            self.history_index = len(self.history) - 1
        else:
            self.history_index = max(0, self.history_index - 1)
        return self.history[self.history_index]

    def next_command(self) -> str:
        """Moves the history cursor one entry forward (the "down" key).

        Stepping past the newest entry returns to a blank prompt.
        """
        if not self.history or self.history_index == -1:
            return ""
        if self.history_index == len(self.history) - 1:
            self.history_index = -1
            return ""
        self.history_index += 1
        return self.history[self.history_index]
