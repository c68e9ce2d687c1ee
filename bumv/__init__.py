"""
bumv - bulk move

Rename many files at once by editing their paths in a text editor.
"""

__version__ = "1.0.0"
