"""Scribe - notes in Markdown, with math and highlighted code, as HTML."""

__version__ = "0.1.0"
