"""Exception types raised by the model builder.

Expected failures that the user can fix (a missing schema, a broken
configuration, a generator failure) derive from ModelBuilderError and
are reported by the CLI as clean messages. I/O failures on target files
propagate as the builtin OSError.
"""


class ModelBuilderError(Exception):
    """Base class for all user-facing model builder errors."""


class SchemaNotFoundError(ModelBuilderError):
    """The schema path is missing or does not hold a model mapping."""

    def __init__(self, path: str, reason: str = "schema not found") -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path


class GenerationError(ModelBuilderError):
    """The model generator failed to materialize class files."""


class ConfigurationError(ModelBuilderError):
    """A required configuration key is missing and has no default."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required configuration value: {key}")
        self.key = key
