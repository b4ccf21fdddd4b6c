"""
Scanning, presentation, selection and move tools for grab.

Each module covers one step of a run: finding recent files, formatting them,
prompting for a choice, and moving the chosen file.
"""
