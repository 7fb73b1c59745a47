import json
import logging
from enum import Enum
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict

from pivotal_tracker.core.exceptions import RemoteRequestError

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="TrackerResource")


class OutputShape(str, Enum):
    """How decoded responses are handed back to the caller"""

    STRUCT = "struct"  # pydantic models, attribute access
    MAP = "map"  # plain dicts / lists


class TrackerResource(BaseModel):
    """
    Any JSON object returned by Tracker.

    Only `kind` is declared; every other server field is kept as an extra
    attribute so nothing is lost and nothing is validated.
    """

    kind: Any = None

    model_config = ConfigDict(extra="allow")

    def to_dict(self) -> dict:
        """Fields the server actually sent, nested resources included"""
        return self.model_dump(exclude_unset=True)


class Story(TrackerResource):
    id: Any = None
    project_id: Any = None
    name: Any = None
    description: Any = None
    story_type: Any = None
    current_state: Any = None
    labels: Any = None


class Task(TrackerResource):
    id: Any = None
    story_id: Any = None
    description: Any = None
    complete: Any = None
    position: Any = None


class Membership(TrackerResource):
    id: Any = None
    project_id: Any = None
    role: Any = None
    person: Any = None


class Project(TrackerResource):
    id: Any = None
    name: Any = None


class Me(TrackerResource):
    """Identity of the token owner, or an error object when the token is rejected"""

    id: Any = None
    name: Any = None
    username: Any = None
    email: Any = None
    error: Any = None


def _to_resources(value: Any, model: Type[R]) -> Any:
    # Nested objects become plain TrackerResource; only the top level gets `model`
    if isinstance(value, list):
        return [_to_resources(item, model) for item in value]
    if isinstance(value, dict):
        fields = {
            key: _to_resources(item, TrackerResource) for key, item in value.items()
        }
        return model.model_validate(fields)
    return value


def decode_response(
    raw: str,
    shape: OutputShape = OutputShape.STRUCT,
    model: Type[R] = TrackerResource,
) -> Any:
    """
    Decode a Tracker JSON response body into the requested output shape.

    Args:
        raw: response body text
        shape: STRUCT for pydantic models, MAP for dicts and lists
        model: resource type used for top-level objects (and list items)

    Returns:
        None for an empty body, otherwise the decoded value

    Raises:
        RemoteRequestError: the body is not valid JSON
    """
    if not raw or not raw.strip():
        return None

    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.error("Response body is not valid JSON: %s", raw[:200])
        raise RemoteRequestError(f"Invalid JSON in response: {e}") from e

    if shape is OutputShape.MAP:
        return data
    return _to_resources(data, model)
