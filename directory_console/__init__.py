"""Directory Console core package.

To drive the whole console:
    from directory_console.core.console import DirectoryConsole

To use the API client only:
    from directory_console.core.api import ApiClient, UsersApi
"""

__version__ = "1.0.0"
