"""ConfigError - Required service configuration is missing."""


class ConfigError(Exception):
    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []
