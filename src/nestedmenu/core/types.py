"""Core type definitions."""

from typing import NewType

# Link of a page as rendered into href attributes (e.g., "/about-us/")
URLPath = NewType("URLPath", str)
