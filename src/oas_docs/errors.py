"""Exception hierarchy for building and serving OAS documents."""


class OasDocsError(Exception):
    """Base class for all oas-docs errors."""


class SerializationError(OasDocsError):
    """The canonical document could not be encoded to YAML."""


class PersistError(OasDocsError):
    """Writing the encoded document to its destination failed."""


class CreateError(PersistError):
    """The destination could not be opened for writing."""


class WriteError(PersistError):
    """Writing or flushing to the destination failed."""


class BuildError(OasDocsError):
    """A build stage failed; the stage error is chained as __cause__."""


class ConfigurationError(OasDocsError):
    """Required server configuration is missing."""


class ServeError(OasDocsError):
    """The HTTP listener failed to start or stopped with an error."""


class DescriptionError(OasDocsError):
    """An API description file could not be read or validated."""
