"""Observation Workflow Service.

This service owns every mutation of an observation: submission, comments,
reassignment, closing and the remediation-action sub-state.

Rules:
1. VALIDATE FIRST - Drafts are fully validated before any upload or write
2. WRITE THROUGH - An operation succeeds only after the repository
   acknowledges; updates return the repository's copy
3. FAIL LOUD - Repository and blob-store failures propagate; writes are
   never retried here
4. NOTIFICATION FIRE-AND-FORGET - Publisher calls are bounded by the I/O
   timeout; failures and timeouts are logged, never raised
5. LOG EVERYTHING - All operations have structured logging
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any, TypeVar
from uuid import uuid4

from sbo_core.application.dtos.observation_draft import ObservationDraft, parse_draft
from sbo_core.application.ports.blob_store import BlobStoreProtocol
from sbo_core.application.ports.notification_publisher import (
    NotificationPublisherProtocol,
)
from sbo_core.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from sbo_core.application.ports.time_authority import TimeAuthorityProtocol
from sbo_core.application.services.base import LoggingMixin
from sbo_core.application.services.io_guard import with_timeout
from sbo_core.config.workflow_config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from sbo_core.domain.errors.observation import NotFoundError, ValidationError
from sbo_core.domain.models.catalog import DEFAULT_CATALOG, ObservationCatalog
from sbo_core.domain.models.identity import Identity
from sbo_core.domain.models.notification import Notification
from sbo_core.domain.models.observation import (
    Comment,
    Observation,
    ObservationStatus,
    SBOKind,
)

T = TypeVar("T")


class ObservationWorkflowService(LoggingMixin):
    """Service driving the observation lifecycle.

    Operations:
        submit: Create a validated observation
        add_comment: Append a comment, moving the observation to pending
        reassign: Route to another area manager, reopening it
        close: Close the observation
        assign_action: Assign the remediation action (once)
        start_action: Mark the remediation action in progress
        complete_action: Mark the remediation action completed

    Attributes:
        _repository: Observation repository.
        _blob_store: Image storage.
        _time: Time authority.
        _publisher: Optional notification publisher.
        _config: Timeouts and concurrency policy.
        _catalog: Closed vocabularies for validation.
    """

    def __init__(
        self,
        repository: ObservationRepositoryProtocol,
        blob_store: BlobStoreProtocol,
        time_authority: TimeAuthorityProtocol,
        publisher: NotificationPublisherProtocol | None = None,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
        catalog: ObservationCatalog = DEFAULT_CATALOG,
    ) -> None:
        """Initialize the workflow service.

        Args:
            repository: Repository for observation persistence.
            blob_store: Store for observation images.
            time_authority: Source of timestamps.
            publisher: Optional notification publisher. If None,
                notifications are skipped.
            config: Workflow configuration.
            catalog: Vocabularies drafts and reassignments are checked against.
        """
        self._repository = repository
        self._blob_store = blob_store
        self._time = time_authority
        self._publisher = publisher
        self._config = config
        self._catalog = catalog
        self._init_logger(component="workflow")

    async def submit(
        self,
        draft: ObservationDraft | Mapping[str, Any],
        author: Identity,
    ) -> Observation:
        """Create a new observation from a draft.

        Safe observations are created closed; unsafe and near-miss ones
        are created open and raise an alert for the area manager.

        Args:
            draft: The submission, as a model or a plain mapping.
            author: The submitting identity; snapshotted onto the record.

        Returns:
            The stored observation: the submitted record with its assigned
            id and first version. It is not read back from the repository.

        Raises:
            ValidationError: If the draft violates any rule (nothing is written).
            StorageError: If the image upload is refused.
            TransientIOError: If a collaborator is unreachable or times out.
        """
        log = self._log_operation("submit", author_id=author.id)

        parsed = parse_draft(draft)
        problems = parsed.problems(self._catalog)
        if problems:
            log.warning("submission_rejected_invalid", errors=problems)
            raise ValidationError(problems)

        log.info("submission_started", kind=parsed.kind.value)

        image_ref: str | None = None
        if parsed.image:
            image_ref = await self._io(
                self._blob_store.upload(parsed.image, author.id),
                "blob_store",
                "upload",
            )
            log.debug("image_uploaded", image_ref=image_ref)

        observation = Observation.create(
            kind=parsed.kind,
            focus=parsed.focus,
            location=parsed.location,
            unit=parsed.unit,
            area_manager=parsed.area_manager,
            category=parsed.category,
            sub_category=parsed.sub_category,
            description=parsed.description,
            suggested_solution=parsed.suggested_solution,
            author=author,
            created_at=self._time.now(),
            image_ref=image_ref,
            is_actionable=parsed.is_actionable,
            action_deadline=parsed.action_deadline,
        )

        observation_id = await self._io(
            self._repository.create(observation), "observation_repository", "create"
        )
        stored = replace(observation, id=observation_id, version=1)

        log.info(
            "submission_completed",
            observation_id=observation_id,
            status=stored.status.value,
            is_actionable=stored.is_actionable,
        )

        if stored.kind != SBOKind.SAFE:
            await self._notify(Notification.new_risk_alert(stored, self._time.now()))

        return stored

    async def get(self, observation_id: str) -> Observation:
        """Read a fresh snapshot of an observation.

        Raises:
            NotFoundError: If the id is unknown.
            TransientIOError: If the repository is unreachable.
        """
        observation = await self._io(
            self._repository.get(observation_id), "observation_repository", "get"
        )
        if observation is None:
            self._log_operation("get", observation_id=observation_id).debug(
                "observation_not_found"
            )
            raise NotFoundError(observation_id)
        return observation

    async def add_comment(
        self,
        observation_id: str,
        author: Identity,
        text: str,
    ) -> Observation:
        """Append a comment; the observation always becomes pending.

        Raises:
            ValidationError: If the text is blank.
            NotFoundError: If the id is unknown.
            TransientIOError: If the repository is unreachable.
        """
        log = self._log_operation(
            "add_comment", observation_id=observation_id, author_id=author.id
        )
        body = text.strip()
        if not body:
            raise ValidationError(["Comment text is required."])

        previous = await self.get(observation_id)
        comment = Comment(
            id=str(uuid4()),
            author_id=author.id,
            author_name=author.display_name,
            text=body,
            timestamp=self._time.now(),
        )
        updated = await self._io(
            self._repository.append_comment(
                observation_id, comment, ObservationStatus.PENDING
            ),
            "observation_repository",
            "append_comment",
        )
        log.info(
            "comment_added",
            comment_id=comment.id,
            previous_status=previous.status.value,
            comment_count=len(updated.comments),
        )
        return updated

    async def reassign(
        self,
        observation_id: str,
        new_area_manager: str,
    ) -> Observation:
        """Route the observation to another area manager and reopen it.

        Raises:
            ValidationError: If the area manager is not recognized.
            NotFoundError: If the id is unknown.
            ConcurrentModificationError: If another writer got there first.
            TransientIOError: If the repository is unreachable.
        """
        log = self._log_operation(
            "reassign", observation_id=observation_id, area_manager=new_area_manager
        )
        if not self._catalog.is_area_manager(new_area_manager):
            raise ValidationError(
                [f"Area Manager '{new_area_manager}' is not a recognized area manager."]
            )

        current = await self.get(observation_id)
        updated = await self._write(
            current, current.reassignment_changes(new_area_manager), "reassign"
        )
        log.info(
            "observation_reassigned",
            previous_area_manager=current.area_manager,
            previous_status=current.status.value,
        )
        return updated

    async def close(self, observation_id: str, closer_id: str) -> Observation:
        """Close the observation.

        Re-closing is allowed and records the latest closer and time. The
        observer is notified only on the transition into closed.

        Raises:
            NotFoundError: If the id is unknown.
            ConcurrentModificationError: If another writer got there first.
            TransientIOError: If the repository is unreachable.
        """
        log = self._log_operation(
            "close", observation_id=observation_id, closer_id=closer_id
        )
        current = await self.get(observation_id)
        now = self._time.now()
        updated = await self._write(
            current, current.closure_changes(closer_id, now), "close"
        )
        log.info("observation_closed", previous_status=current.status.value)

        if not current.is_closed:
            await self._notify(Notification.closure_notice(updated, now))
        return updated

    async def assign_action(
        self,
        observation_id: str,
        assignee_id: str,
        deadline: datetime | None = None,
    ) -> Observation:
        """Assign the remediation action.

        Raises:
            PreconditionError: If not actionable or already assigned.
            NotFoundError: If the id is unknown.
            ConcurrentModificationError: If another writer got there first.
            TransientIOError: If the repository is unreachable.
        """
        log = self._log_operation(
            "assign_action", observation_id=observation_id, assignee_id=assignee_id
        )
        current = await self.get(observation_id)
        try:
            changes = current.action_assignment_changes(
                assignee_id, self._time.now(), deadline
            )
        except Exception as e:
            log.warning("action_assignment_rejected", error=str(e))
            raise
        updated = await self._write(current, changes, "assign_action")
        log.info("action_assigned")
        return updated

    async def start_action(self, observation_id: str) -> Observation:
        """Move an assigned action from pending to in-progress.

        Raises:
            PreconditionError: If not actionable, unassigned or not pending.
            NotFoundError: If the id is unknown.
        """
        log = self._log_operation("start_action", observation_id=observation_id)
        current = await self.get(observation_id)
        updated = await self._write(current, current.action_start_changes(), "start_action")
        log.info("action_started")
        return updated

    async def complete_action(self, observation_id: str) -> Observation:
        """Mark the remediation action completed.

        Valid from pending or in-progress. Completing an already completed
        action is not rejected; it records the latest completion time.

        Raises:
            PreconditionError: If the observation is not actionable.
            NotFoundError: If the id is unknown.
        """
        log = self._log_operation("complete_action", observation_id=observation_id)
        current = await self.get(observation_id)
        updated = await self._write(
            current,
            current.action_completion_changes(self._time.now()),
            "complete_action",
        )
        log.info(
            "action_completed",
            previous_action_status=(
                current.action_status.value if current.action_status else None
            ),
        )
        return updated

    async def _write(
        self,
        current: Observation,
        changes: Mapping[str, Any],
        operation: str,
    ) -> Observation:
        expected = current.version if self._config.optimistic_concurrency else None
        return await self._io(
            self._repository.update(current.id or "", changes, expected_version=expected),
            "observation_repository",
            operation,
        )

    async def _io(self, awaitable: Awaitable[T], collaborator: str, operation: str) -> T:
        return await with_timeout(
            awaitable, self._config.io_timeout_seconds, collaborator, operation
        )

    async def _notify(self, notification: Notification) -> None:
        if self._publisher is None:
            return
        try:
            await self._io(
                self._publisher.publish(notification), "notification_publisher", "publish"
            )
        except Exception as e:
            self._log_operation(
                "notify",
                sbo_id=notification.sbo_id,
                recipient=notification.recipient,
            ).warning("notification_failed", error=str(e))
