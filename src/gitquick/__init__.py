"""Quick git shortcuts.

Features:
- Create a branch and switch to it in one step
- Stage, commit and optionally push in one step
- List local branches by most recent activity
"""

__version__ = "0.1.0"
