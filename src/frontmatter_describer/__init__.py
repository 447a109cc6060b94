"""Fill in missing front-matter descriptions for Markdown documents."""

__version__ = "0.1.0"
