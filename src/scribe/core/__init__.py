"""Core rendering: events, collaborators and the notes site."""
