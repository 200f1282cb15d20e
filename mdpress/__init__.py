"""mdpress - markdown to HTML pages and RSS feed publisher.

Renders a directory of markdown articles through a Jinja2 page layout and
a chosen article through a feed layout.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
