"""HTTP proxy for collection extraction and import."""

from .server import ConsoleRequestHandler, create_server, handle_extract, handle_import, serve

__all__ = [
    'ConsoleRequestHandler',
    'create_server',
    'handle_extract',
    'handle_import',
    'serve',
]
