"""
togglPy: A CLI tool for summarizing Toggl Track time entries.

- Fetches time entries and projects from the Toggl Track API
- Lists a day's entries or totals a month by project and tag
- Exports reports to Markdown
- Can be used as a CLI (via `python -m togglpy` or `togglpy` if installed as a package)
"""

__version__ = "0.1.0"
