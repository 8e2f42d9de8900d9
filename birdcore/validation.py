# =============================================================================
# birdcore/validation.py  -  Argument Validation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Takes an operation name plus whatever arguments the caller sent and
#   returns a clean argument dict the endpoint builders can trust:
#
#     1. The operation must exist             -> else UnknownOperation
#     2. Every required parameter is present  -> else InvalidArguments
#     3. Absent optional parameters get their declared default
#     4. Values are coerced to the declared type ("20" -> 20, "true" -> True);
#        numbers are counts, so 2.5 becomes 2
#     5. Enumerated values must be in their closed set
#     6. Numbers outside declared bounds are CLAMPED, not rejected
#        (asking for 100 random birds gets you 50)
#     7. Keys the catalog doesn't declare are dropped
#
#   Nothing here performs I/O, and the caller's mapping is never modified.
# =============================================================================

import math
from typing import Any, Mapping, Optional

from birdcore.catalog import Catalog, OperationSpec, ParamSpec
from birdcore.errors import InvalidArguments, UnknownOperation

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def _coerce_number(op: str, param: ParamSpec, value: Any):
    if isinstance(value, bool):
        raise InvalidArguments(f"Parameter '{param.name}' must be a number, got a boolean", op)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise InvalidArguments(
                f"Parameter '{param.name}' must be a number, got {value!r}", op
            ) from None
    if not isinstance(value, (int, float)):
        raise InvalidArguments(
            f"Parameter '{param.name}' must be a number, got {type(value).__name__}", op
        )
    if not math.isfinite(value):
        raise InvalidArguments(
            f"Parameter '{param.name}' must be a finite number, got {value!r}", op
        )
    # Every numeric parameter is a count, so fractions are dropped
    value = int(value)

    if param.minimum is not None and value < param.minimum:
        value = param.minimum
    if param.maximum is not None and value > param.maximum:
        value = param.maximum
    return value


def _coerce_boolean(op: str, param: ParamSpec, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidArguments(f"Parameter '{param.name}' must be a boolean, got {value!r}", op)


def _coerce(op: str, param: ParamSpec, value: Any) -> Any:
    if param.type == "string":
        if not isinstance(value, str):
            raise InvalidArguments(
                f"Parameter '{param.name}' must be a string, got {type(value).__name__}", op
            )
        if param.enum is not None and value not in param.enum:
            raise InvalidArguments(
                f"Parameter '{param.name}' must be one of {', '.join(param.enum)}; got {value!r}", op
            )
        return value

    if param.type == "number":
        return _coerce_number(op, param, value)

    if param.type == "boolean":
        return _coerce_boolean(op, param, value)

    if param.type == "object":
        if not isinstance(value, Mapping):
            raise InvalidArguments(
                f"Parameter '{param.name}' must be an object, got {type(value).__name__}", op
            )
        return dict(value)

    # array of strings
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise InvalidArguments(f"Parameter '{param.name}' must be a list of strings", op)
    return list(value)


def resolve_operation(catalog: Catalog, name: str) -> OperationSpec:
    operation = catalog.get(name)
    if operation is None:
        raise UnknownOperation(name)
    return operation


def validate_arguments(
    catalog: Catalog,
    name: str,
    arguments: Optional[Mapping[str, Any]],
) -> dict[str, Any]:
    """Check, default, and coerce the arguments for one tool call.

    Args:
        catalog: The catalog to validate against.
        name: Operation name (e.g. "search_birds").
        arguments: The caller's argument mapping.  None means "no arguments".

    Returns:
        A new dict holding exactly the operation's declared parameters
        (optional ones without a default are left out when absent).

    Raises:
        UnknownOperation: `name` is not in the catalog.
        InvalidArguments: a required parameter is missing, or a value has
            the wrong type / is outside its enumerated set.
    """
    operation = resolve_operation(catalog, name)

    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidArguments(f"Arguments for {name} must be an object", name)

    missing = [p for p in operation.required if arguments.get(p) is None]
    if missing:
        raise InvalidArguments(
            f"Missing required parameter(s) for {name}: {', '.join(missing)}", name
        )

    validated: dict[str, Any] = {}
    for param in operation.params:
        value = arguments.get(param.name)
        if value is None:
            if param.default is not None:
                validated[param.name] = param.default
            continue
        validated[param.name] = _coerce(name, param, value)
    return validated
