# navtemplate/errors.py


class NavTemplateError(Exception):
    """Base class for errors raised by navtemplate."""


class ConfigError(NavTemplateError):
    """The configuration file exists but cannot be used."""


class DefaultsError(NavTemplateError):
    """The shared defaults file cannot be read or written."""


class MenuOrderError(NavTemplateError):
    """A menu reorder referenced a position outside the list."""
