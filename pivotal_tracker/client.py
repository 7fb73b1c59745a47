"""
TrackerClient - Pivotal Tracker REST API v5 binding

Endpoints used:
- POST /projects/:project_id/stories
- POST /projects/:project_id/stories/:story_id/tasks
- GET  /projects/:project_id/memberships
- PUT  /projects/:project_id/stories/:story_id
- GET  /projects/:project_id/stories
- GET  /projects
- GET  /me
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pivotal_tracker.core.config import API_URL, Settings
from pivotal_tracker.core.config import settings as default_settings
from pivotal_tracker.core.exceptions import ConfigurationError, RemoteAuthError
from pivotal_tracker.core.transport import HTTP_TIMEOUT, TrackerTransport, encode_body
from pivotal_tracker.schemas.tracker import (
    Me,
    Membership,
    OutputShape,
    Project,
    Story,
    Task,
    decode_response,
)

logger = logging.getLogger(__name__)


class TrackerClient:
    """
    Simple Pivotal Tracker API client.

    Holds the API token and the context project, and maps each supported
    operation onto exactly one HTTP request. Responses come back as pydantic
    models (OutputShape.STRUCT, the default) or as plain dicts and lists
    (OutputShape.MAP).
    """

    API_URL = API_URL

    def __init__(
        self,
        api_token: Optional[str],
        project_id: Union[str, int, None],
        output_shape: Union[OutputShape, str] = OutputShape.STRUCT,
        *,
        base_url: str = API_URL,
        timeout: float = HTTP_TIMEOUT,
        transport: Optional[TrackerTransport] = None,
    ):
        """
        Args:
            api_token: API token from the Tracker profile page
            project_id: ID of the context project
            output_shape: STRUCT for models, MAP for dicts ("struct"/"map" also accepted)
            base_url: API root, defaults to the public v5 endpoint
            timeout: request timeout in seconds
            transport: pre-built transport; one is created when omitted

        Raises:
            ConfigurationError: no API token, or an unknown output shape
        """
        if not api_token:
            raise ConfigurationError("No API key provided")

        try:
            self.output_shape = OutputShape(output_shape)
        except ValueError as e:
            raise ConfigurationError(f"Unknown output shape: {output_shape!r}") from e

        if not project_id:
            logger.warning(
                "No project_id given; project-scoped calls will not resolve"
            )
        self.project_id = project_id
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else TrackerTransport(
            api_token, base_url=base_url, timeout=timeout
        )
        logger.info(
            "TrackerClient ready: project_id=%s, output_shape=%s",
            project_id,
            self.output_shape.value,
        )

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, **overrides: Any
    ) -> "TrackerClient":
        """
        Build a client from PIVOTAL_TRACKER_* environment settings.

        Keyword overrides are passed through to the constructor.
        """
        settings = settings or default_settings
        kwargs: Dict[str, Any] = {
            "api_token": settings.PIVOTAL_TRACKER_API_TOKEN,
            "project_id": settings.PIVOTAL_TRACKER_PROJECT_ID,
            "base_url": settings.PIVOTAL_TRACKER_BASE_URL,
            "timeout": settings.PIVOTAL_TRACKER_TIMEOUT,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    def __enter__(self) -> "TrackerClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if self._owns_transport:
            self.transport.close()

    def _decode(self, raw: str, model) -> Any:
        return decode_response(raw, self.output_shape, model)

    @staticmethod
    def _filter_params(filter: Optional[str]) -> Optional[Dict[str, str]]:
        return {"filter": filter} if filter else None

    def add_story(self, story: Dict[str, Any]) -> Union[Story, Dict[str, Any]]:
        """
        Create a story in the context project and return the stored story.

        API: POST /projects/:project_id/stories
        """
        logger.debug("Adding story to project %s", self.project_id)
        return self._decode(
            self.transport.post(
                f"/projects/{self.project_id}/stories", encode_body(story)
            ),
            Story,
        )

    def add_task(self, story_id: int, description: str) -> Union[Task, Dict[str, Any]]:
        """
        Add a task with the given description to a story.

        API: POST /projects/:project_id/stories/:story_id/tasks
        """
        logger.debug("Adding task to story %s", story_id)
        return self._decode(
            self.transport.post(
                f"/projects/{self.project_id}/stories/{story_id}/tasks",
                encode_body({"description": description}),
            ),
            Task,
        )

    def get_memberships(self, filter: Optional[str] = None) -> List[Any]:
        """
        List memberships of the context project.

        API: GET /projects/:project_id/memberships
        """
        return self._decode(
            self.transport.get(
                f"/projects/{self.project_id}/memberships",
                self._filter_params(filter),
            ),
            Membership,
        )

    def add_labels(
        self, story_id: int, labels: List[str]
    ) -> Union[Story, Dict[str, Any]]:
        """
        Send the labels to a story and return the updated story.

        The labels array is the whole PUT body; the current story is not read
        first, so the server's merge rules decide what happens to other fields.

        API: PUT /projects/:project_id/stories/:story_id
        """
        logger.debug("Labelling story %s with %s", story_id, labels)
        return self._decode(
            self.transport.put(
                f"/projects/{self.project_id}/stories/{story_id}",
                encode_body(list(labels)),
            ),
            Story,
        )

    def get_stories(self, filter: Optional[str] = None) -> List[Any]:
        """
        List stories of the context project, optionally scoped by a filter
        expression such as "mywork:alice" or "label:bug".

        API: GET /projects/:project_id/stories
        """
        return self._decode(
            self.transport.get(
                f"/projects/{self.project_id}/stories",
                self._filter_params(filter),
            ),
            Story,
        )

    def get_projects(self) -> List[Any]:
        """
        List projects visible to the token owner.

        API: GET /projects
        """
        return self._decode(self.transport.get("/projects"), Project)

    def get_me(self) -> Union[Me, Dict[str, Any]]:
        """
        Identity of the token owner.

        API: GET /me
        """
        return self._decode(self.transport.get("/me"), Me)

    def get_my_work(self, username: Optional[str] = None) -> List[Any]:
        """
        Stories the user owns or requested.

        Without a username the token owner is looked up first, which costs an
        extra request.

        Args:
            username: Tracker username; defaults to the token owner

        Raises:
            RemoteAuthError: the identity lookup returned an error object
                or no username
        """
        if not username:
            me = self.get_me()
            if isinstance(me, Me):
                me = me.to_dict()
            me = me or {}

            if me.get("kind") == "error":
                logger.error("Identity lookup failed: %s", me.get("error"))
                raise RemoteAuthError(me.get("error") or "Identity lookup failed")

            username = me.get("username")
            if not username:
                raise RemoteAuthError("Could not resolve the current user")
            logger.debug("Resolved current user: %s", username)

        return self.get_stories(f"mywork:{username}")
