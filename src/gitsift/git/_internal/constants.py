"""Internal pygit2 constants - keeps trivia out of public modules."""

from __future__ import annotations

import pygit2

# Commit walking
SORT_TOPOLOGICAL = pygit2.GIT_SORT_TOPOLOGICAL

# Tree/index entry modes
FILEMODE_COMMIT = pygit2.GIT_FILEMODE_COMMIT

# Delta status
DELTA_ADDED = pygit2.GIT_DELTA_ADDED
DELTA_DELETED = pygit2.GIT_DELTA_DELETED
DELTA_MODIFIED = pygit2.GIT_DELTA_MODIFIED
DELTA_RENAMED = pygit2.GIT_DELTA_RENAMED
DELTA_COPIED = pygit2.GIT_DELTA_COPIED
DELTA_TYPECHANGE = pygit2.GIT_DELTA_TYPECHANGE
