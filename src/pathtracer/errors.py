"""Exception types raised by the renderer and its command-line front end."""


class RenderError(RuntimeError):
    """A render worker failed; the whole render is abandoned."""

    def __init__(self, message: str, worker_id: int | None = None) -> None:
        super().__init__(message)
        self.worker_id = worker_id


class OutputPathError(OSError):
    """The output path cannot be written (directory, or overwrite declined)."""


class ConfigError(ValueError):
    """A configuration value could not be parsed."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for '{key}': {reason}")
        self.key = key
        self.value = value
