"""
Completion check for interactively typed SPARQL.

The buffer is run through rdflib's pyparsing SPARQL grammar, the query
grammar or, when the text starts with an update keyword, the update
grammar. A buffer that parses is finished; anything else, whether
truncated or simply wrong, means the prompt keeps collecting lines.
"""
import logging
from enum import Enum
from typing import Any, Callable

from pyparsing import ParseBaseException
from rdflib.plugins.sparql.parser import parseQuery, parseUpdate

from sparqlite.sparql.query import detect_query_type, is_update

logger = logging.getLogger(__name__)


class ValidationState(Enum):
    """Verdict for an input buffer."""
    VALID = "valid"
    INCOMPLETE = "incomplete"


def _parses(parse: Callable[[str], Any], buffer: str) -> bool:
    try:
        parse(buffer)
    except ParseBaseException:
        return False
    except Exception as e:
        # parse actions can fail on input the grammar half-accepts
        logger.debug(f"Grammar action failed while validating input: {e}")
        return False
    return True


def validate(buffer: str) -> ValidationState:
    """
    Decide whether ``buffer`` is a complete SPARQL query or update.

    Prefixed names are not resolved, so a body that relies on the injected
    PREFIX header still validates. The update grammar accepts an empty
    request, so it is only tried for text that starts with an update
    keyword (INSERT, DELETE, LOAD, CLEAR, WITH).

    Args:
        buffer: The whole accumulated input, not just the latest line

    Returns:
        ValidationState.VALID if the grammar accepts it, otherwise
        ValidationState.INCOMPLETE
    """
    if is_update(detect_query_type(buffer)):
        parse = parseUpdate
    else:
        parse = parseQuery

    if _parses(parse, buffer):
        return ValidationState.VALID
    return ValidationState.INCOMPLETE


def is_complete(buffer: str) -> bool:
    return validate(buffer) is ValidationState.VALID
