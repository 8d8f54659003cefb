from importlib.metadata import PackageNotFoundError, version

# Used when running from a source tree that is not installed
__version__ = "0.1.0"


def get_version() -> str:
    """
    Returns the current version of the application.
    Priorities:
    1. Version of the installed distribution
    2. Fallback __version__
    """
    try:
        return version("softicar-samba")
    except PackageNotFoundError:
        return __version__
