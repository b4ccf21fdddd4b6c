"""
grab - Core Package

Pick a recently created file from your download folders and move it
into the current directory.
"""

__version__ = "0.1.0"
__author__ = "grab contributors"
