# =============================================================================
# birdcore/dispatch.py  -  One Tool Call, Start to Finish
# =============================================================================
#
# HOW A CALL FLOWS:
#
#   VALIDATING -> BUILDING -> AWAITING_RESPONSE -> FORMATTING -> DONE
#       |                           |                  |
#       +---------------------------+------------------+--> FAILED
#
#   VALIDATING         unknown tool / bad arguments (no request is sent)
#   AWAITING_RESPONSE  the API failed, timed out, or returned junk
#   FORMATTING         the payload had a shape we can't render
#
# dispatch() holds no state between calls.  The catalog and the API client
# come in as arguments, so concurrent calls share nothing mutable.
# =============================================================================

from enum import Enum
import logging
from typing import Any, Mapping, Optional

from birdcore.catalog import Catalog
from birdcore.client import BirdApiClient
from birdcore.endpoints import build_request
from birdcore.errors import BirdDataError, FormattingAnomaly
from birdcore.formatters import format_report
from birdcore.validation import validate_arguments

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    VALIDATING = "validating"
    BUILDING = "building"
    AWAITING_RESPONSE = "awaiting_response"
    FORMATTING = "formatting"
    DONE = "done"


async def dispatch(
    catalog: Catalog,
    name: str,
    arguments: Optional[Mapping[str, Any]],
    client: BirdApiClient,
) -> str:
    """Run one tool call and return its Markdown report.

    Args:
        catalog: The operation catalog (normally birdcore.CATALOG).
        name: Operation name requested by the host.
        arguments: The host's argument mapping (may be None).
        client: An open BirdApiClient.

    Returns:
        The rendered report text.

    Raises:
        BirdDataError: one of UnknownOperation, InvalidArguments,
            UpstreamFailure or FormattingAnomaly, with `.phase` set to the
            step that failed.
    """
    phase = Phase.VALIDATING
    try:
        args = validate_arguments(catalog, name, arguments)

        phase = Phase.BUILDING
        request = build_request(name, args)
        logger.debug("%s -> %s %s", name, request.method, request.target)

        phase = Phase.AWAITING_RESPONSE
        response = await client.execute(name, request)

        phase = Phase.FORMATTING
        try:
            report = format_report(name, response, args)
        except BirdDataError:
            raise
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            # A formatter tripped over something the placeholders didn't cover
            logger.exception("Unexpected payload shape while formatting %s", name)
            raise FormattingAnomaly(name, f"could not render API response ({exc!r})") from exc

        phase = Phase.DONE
        logger.debug("%s %s (%d chars)", name, phase.value, len(report))
        return report
    except BirdDataError as exc:
        exc.phase = phase.value
        logger.warning("%s failed while %s: [%s] %s", name, phase.value, exc.kind, exc.message)
        raise
