"""Errors raised while setting the process up."""


class UtilError(Exception):
    pass


class ConfigurationError(UtilError):
    """Settings cannot be used in the selected environment.

    Raised at startup, before the app accepts requests.
    """
