"""
Interpretation of response envelopes.

The remote answers HTTP 200 for every protocol-level success and reports the
outcome in ``response.errormessage``. Some of those codes mean success for a
given method; the table in constants.RECOVERABLE_CODES decides which.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .constants import AUTHENTICATION_CODES, RECOVERABLE_CODES
from .exceptions import AuthenticationError, RemoteError


def extract_error(envelope: Any) -> Optional[str]:
    """
    Extract the primary error code from a response envelope.

    Args:
        envelope: Parsed JSON body returned by call_method

    Returns:
        The code found under response.errormessage, the first element when
        it is a list, or None when there is no error slot.
    """
    if not isinstance(envelope, dict):
        return None
    response = envelope.get('response')
    if not isinstance(response, dict) or 'errormessage' not in response:
        return None

    message = response['errormessage']
    if isinstance(message, (list, tuple)):
        return message[0] if message else None
    return message


@dataclass(frozen=True)
class Recoverable:
    """A code in the error slot that means the call succeeded."""
    code: str


@dataclass(frozen=True)
class Failure:
    """A code in the error slot that means the call failed."""
    code: str

    def to_exception(self, envelope=None) -> RemoteError:
        if self.code in AUTHENTICATION_CODES:
            return AuthenticationError(self.code, envelope)
        return RemoteError(self.code, envelope)


Outcome = Union[Recoverable, Failure, None]


def interpret(method: str, envelope: Dict[str, Any]) -> Outcome:
    """
    Classify the error slot of an envelope for a given method.

    Returns None when no code is present, Recoverable when the code is a
    known success marker for ``method``, and Failure otherwise.
    """
    code = extract_error(envelope)
    if code is None or code == '':
        return None
    if code in RECOVERABLE_CODES.get(method, ()):
        return Recoverable(code)
    return Failure(code)


def raise_for_error(method: str, envelope: Dict[str, Any]) -> Outcome:
    """Raise the matching RemoteError for a Failure, otherwise return the outcome."""
    outcome = interpret(method, envelope)
    if isinstance(outcome, Failure):
        raise outcome.to_exception(envelope)
    return outcome
