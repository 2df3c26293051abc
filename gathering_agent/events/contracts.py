# gathering_agent/events/contracts.py - Event envelope and payload codec
"""
JSON codec for the events consumed by the agent.

Events travel as CloudEvents in structured mode:

    {"specversion": "1.0", "id": "...", "source": "...",
     "type": "Trento.Checks.V1.ExecutionRequested", "data": {...}}

Payloads are validated with pydantic models and converted to the
immutable domain types before aggregation.
"""

from typing import Any, Dict, List, Type, TypeVar
import json
import uuid

from pydantic import BaseModel, ValidationError

from gathering_agent.errors import MalformedEnvelopeError, MalformedPayloadError
from gathering_agent.gatherers.facts import FactRequest, GatheringTarget


EXECUTION_REQUESTED_EVENT_TYPE = "Trento.Checks.V1.ExecutionRequested"

EVENT_SOURCE = "gathering-agent"

PayloadT = TypeVar('PayloadT', bound=BaseModel)


class FactRequestPayload(BaseModel):
    """Wire model for a single fact request"""
    argument: str
    check_id: str
    gatherer: str
    name: str

    def to_domain(self) -> FactRequest:
        return FactRequest(
            argument=self.argument,
            check_id=self.check_id,
            gatherer=self.gatherer,
            name=self.name
        )


class TargetPayload(BaseModel):
    """Wire model for one agent's share of an execution"""
    agent_id: str
    fact_requests: List[FactRequestPayload] = []

    def to_domain(self) -> GatheringTarget:
        return GatheringTarget(
            agent_id=self.agent_id,
            fact_requests=tuple(request.to_domain() for request in self.fact_requests)
        )


class ExecutionRequested(BaseModel):
    """Payload of the execution requested event"""
    execution_id: str
    group_id: str
    targets: List[TargetPayload] = []

    def domain_targets(self) -> List[GatheringTarget]:
        return [target.to_domain() for target in self.targets]


def _load_envelope(raw_event: bytes) -> Dict[str, Any]:
    try:
        envelope = json.loads(raw_event)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise MalformedEnvelopeError(f"event is not valid JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise MalformedEnvelopeError("event envelope must be a JSON object")

    return envelope


def decode_event_type(raw_event: bytes) -> str:
    """
    Extract the event type tag from a raw envelope.

    Args:
        raw_event: Raw event bytes

    Returns:
        Event type string

    Raises:
        MalformedEnvelopeError: If the envelope or its type cannot be read
    """
    envelope = _load_envelope(raw_event)
    event_type = envelope.get('type')

    if not isinstance(event_type, str) or not event_type:
        raise MalformedEnvelopeError("event envelope has no type")

    return event_type


def decode_payload(raw_event: bytes, model: Type[PayloadT]) -> PayloadT:
    """
    Decode the data section of a raw envelope into a payload model.

    Args:
        raw_event: Raw event bytes
        model: pydantic model describing the payload

    Returns:
        Validated payload instance

    Raises:
        MalformedPayloadError: If the data section is missing or invalid
    """
    try:
        envelope = _load_envelope(raw_event)
    except MalformedEnvelopeError as e:
        raise MalformedPayloadError(str(e)) from e

    if 'data' not in envelope:
        raise MalformedPayloadError(f"{model.__name__} event carries no data")

    try:
        return model.model_validate(envelope['data'])
    except ValidationError as e:
        raise MalformedPayloadError(f"invalid {model.__name__} payload: {e}") from e


def encode_event(event_type: str, payload: BaseModel) -> bytes:
    """
    Wrap a payload into a structured-mode envelope.

    Args:
        event_type: Event type tag
        payload: Payload model

    Returns:
        Raw event bytes
    """
    envelope = {
        'specversion': '1.0',
        'id': str(uuid.uuid4()),
        'source': EVENT_SOURCE,
        'type': event_type,
        'datacontenttype': 'application/json',
        'data': payload.model_dump(),
    }
    return json.dumps(envelope).encode('utf-8')
