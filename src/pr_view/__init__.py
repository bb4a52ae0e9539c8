"""pr-view — track GitHub repositories and list their open pull requests.

Keeps a small list of ``owner/repo`` (or ``owner/repo#number``) references
and shows every open PR across them in a single table.
"""

__version__ = "0.1.0"
