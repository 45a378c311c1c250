"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """A required setting still holds its placeholder value."""

    def __init__(self, env_var: str, environment: str):
        self.env_var = env_var
        self.environment = environment
        super().__init__(f"{env_var} must be configured in {environment}")


class DependencyInjectionError(UtilError):
    """No provider implementation matches the requested component."""

    pass
