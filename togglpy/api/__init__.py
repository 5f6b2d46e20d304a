"""Toggl API access for togglPy."""

from .client import TogglClient, TogglRepository, TogglTimeEntry, Project

__all__ = ['TogglClient', 'TogglRepository', 'TogglTimeEntry', 'Project']
