class SnarkError(Exception):
    """Base class for every error raised by the pipeline."""


class InvalidCommand(SnarkError):
    pass


class UnsupportedProtocol(SnarkError):
    pass


class InvalidProof(UnsupportedProtocol):
    pass


class TemplateNotFound(SnarkError):
    pass


class TemplateError(SnarkError):
    pass


class FieldElementOverflow(SnarkError, ValueError):
    pass


class ArtifactError(SnarkError):
    pass


class WitnessError(SnarkError):
    pass
