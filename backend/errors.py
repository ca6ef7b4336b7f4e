# backend/errors.py


class WorkspaceError(Exception):
    """Base for every failure an operation can report back to the caller."""
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(WorkspaceError):
    kind = "configuration_error"


class ArgumentError(WorkspaceError):
    """Malformed request. Raised before any filesystem access."""
    kind = "argument_error"


class ContainmentViolation(WorkspaceError):
    kind = "containment_violation"


class NotFound(WorkspaceError):
    kind = "not_found"


class TypeMismatch(WorkspaceError):
    kind = "type_mismatch"


class WorkspaceIOError(WorkspaceError):
    kind = "io_error"


def from_os_error(op: str, display: str, e: OSError) -> WorkspaceError:
    """Map an OSError raised while touching `display` to the error taxonomy."""
    if isinstance(e, FileNotFoundError):
        return NotFound(f"{op}: not found: {display}")
    if isinstance(e, (IsADirectoryError, NotADirectoryError, FileExistsError)):
        return TypeMismatch(f"{op}: wrong kind of entry: {display}")
    reason = e.strerror or str(e)
    return WorkspaceIOError(f"{op}: {reason}: {display}")
