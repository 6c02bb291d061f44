"""
Create Pipeline - Persist then Enrich

Runs one user creation through the stages:

    received -> persisted -> enriched -> completed

with a terminal ``failed`` state reachable from any of them. Stages run
strictly in order; no stage is retried and a failed enrichment does not undo
the persisted record.

Usage:
    from apps.registrar.pipeline import CreateUserPipeline

    pipeline = CreateUserPipeline(store, activity_client)
    result = await pipeline.run({"name": "Ann", "email": "a@x.com", "age": 30})
"""

import logging
import time
from collections.abc import Mapping
from enum import Enum
from typing import Any

from utils.activity import ActivityClient
from utils.errors import (
    CreateUserError,
    FetchError,
    PipelineStage,
    StoreError,
    UsersBackendError,
)
from utils.schemas import CreateUserResult, UserRecord
from utils.store import RecordStore

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    RECEIVED = "received"
    PERSISTED = "persisted"
    ENRICHED = "enriched"
    COMPLETED = "completed"
    FAILED = "failed"


class CreateUserPipeline:
    """
    Orchestrates record persistence and activity enrichment.

    Handles:
    - Field extraction from the request payload
    - Store append, then activity fetch
    - Translation of store/fetch errors into a staged CreateUserError
    """

    def __init__(self, store: RecordStore, activity_client: ActivityClient) -> None:
        """
        Initialize create pipeline.

        Args:
            store: Record store the user is appended to
            activity_client: Client used to fetch the enrichment value
        """
        self.store = store
        self.activity_client = activity_client

    async def run(self, payload: Mapping[str, Any]) -> CreateUserResult:
        """
        Create one user.

        Args:
            payload: Decoded request body

        Returns:
            The stored record combined with the fetched activity

        Raises:
            CreateUserError: If persisting or enriching fails
        """
        start_time = time.time()
        record = UserRecord.from_payload(payload)
        state = PipelineState.RECEIVED
        logger.debug("Create pipeline state=%s", state.value)

        try:
            await self.store.append(record)
        except StoreError as e:
            self._log_failure(state, PipelineStage.PERSIST, e)
            raise CreateUserError(PipelineStage.PERSIST, e) from e

        state = PipelineState.PERSISTED
        logger.debug("Create pipeline state=%s", state.value)

        try:
            activity = await self.activity_client.fetch_activity()
        except FetchError as e:
            self._log_failure(state, PipelineStage.ENRICH, e)
            raise CreateUserError(PipelineStage.ENRICH, e) from e

        state = PipelineState.ENRICHED
        logger.debug("Create pipeline state=%s", state.value)

        result = CreateUserResult(user=record, activity=activity)

        state = PipelineState.COMPLETED
        logger.info(
            "User created: state=%s, elapsed=%.3fs",
            state.value, time.time() - start_time,
        )
        return result

    @staticmethod
    def _log_failure(state: PipelineState, stage: PipelineStage, error: UsersBackendError) -> None:
        logger.warning(
            "Create pipeline failed: from_state=%s, to_state=%s, stage=%s, kind=%s, error=%s",
            state.value,
            PipelineState.FAILED.value,
            stage.value,
            error.kind,
            str(error),
        )
