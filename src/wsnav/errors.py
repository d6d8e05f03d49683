"""Exception hierarchy for workspace queries, markers and service calls.

Synchronous workspace operations raise these loudly; batch updates and
observer chains catch them, log and move on.
"""


class WorkspaceError(Exception):
    """Base class for all wsnav errors."""


class ArgumentError(WorkspaceError, ValueError):
    """A required argument (path, field) was None or empty."""


class NotInitializedError(WorkspaceError, RuntimeError):
    """The workspace was queried before a tree was loaded."""


class NotFoundError(WorkspaceError, LookupError):
    """A path is not present in the workspace index."""


class MarkerNotFoundError(NotFoundError):
    """No marker fields exist for a path."""


class MarkerFieldNotFoundError(NotFoundError):
    """The marker bag of a path lacks the requested field."""


class NotInWorkspaceError(NotFoundError):
    """A marker write targeted a path the index does not contain."""


class ServiceError(WorkspaceError):
    """A backend (persistence or execution) request failed."""
