"""
Spoiler Board Sync

Keeps a Trello board in step with a set spoiler feed and imports set
review ratings as card comments.
"""

__version__ = "1.0.0"
