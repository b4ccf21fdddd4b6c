"""
Data models for grab.

This module contains the configuration and file descriptor structures.
"""

from .config import GrabConfig
from .descriptor import FileDescriptor, format_size

__all__ = ['GrabConfig', 'FileDescriptor', 'format_size']
