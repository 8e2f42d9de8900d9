# =============================================================================
# birdcore/errors.py  -  The Error Taxonomy
# =============================================================================
#
# Every way a tool call can fail ends up as one of these:
#
#   UnknownOperation   the caller asked for a tool that isn't in the catalog
#   InvalidArguments   a required argument is missing or can't be coerced
#   UpstreamFailure    the bird data API failed, timed out, or sent junk
#   FormattingAnomaly  the API answered with a shape we can't render
#                      (reported to the caller as an upstream failure)
#
# Each error carries a machine-readable `kind`, the operation name, and the
# dispatcher phase it happened in, so the tool server can produce a single
# clearly labeled error result without ever leaking a raw transport
# exception.
# =============================================================================

from typing import Optional


class BirdDataError(Exception):
    """Base class for every failure the dispatcher reports."""

    kind = "bird_data_error"

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.phase: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "operation": self.operation,
            "phase": self.phase,
            "message": self.message,
        }


class UnknownOperation(BirdDataError):
    kind = "unknown_operation"

    def __init__(self, operation: str):
        super().__init__(f"Unknown tool: {operation}", operation)


class InvalidArguments(BirdDataError):
    kind = "invalid_arguments"


class UpstreamFailure(BirdDataError):
    """The bird data API could not produce a usable answer."""

    kind = "upstream_failure"

    def __init__(self, operation: str, message: str):
        super().__init__(f"Error executing tool {operation}: {message}", operation)
        self.cause = message


class FormattingAnomaly(UpstreamFailure):
    """The API answered, but with a payload shape the report can't use."""
