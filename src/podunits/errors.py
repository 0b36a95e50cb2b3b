"""Exceptions raised while loading and generating units."""


class PodunitsError(Exception):
    """Base class for generation errors."""


class ConfigError(PodunitsError):
    """A configuration file could not be read as expected."""


class DuplicateNameError(PodunitsError):
    """A pod, container or unit name was declared more than once."""


class UnknownDependencyError(PodunitsError):
    """A container depends on a container that is not declared next to it."""
