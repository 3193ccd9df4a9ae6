"""Create/edit modal state machine shared by every entity form."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Generic, TypeVar

from ..services.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

D = TypeVar("D")  # draft
R = TypeVar("R")  # record


class ModalState(Enum):
    CLOSED = "closed"
    OPEN_CREATE = "open_create"
    OPEN_EDIT = "open_edit"
    SUBMITTING = "submitting"


class ValidationError(Exception):
    """A draft failed client-side validation; nothing was sent."""


class FormModal(Generic[D, R]):
    """A form shown in a modal, editing one draft at a time.

    Lifecycle:
        CLOSED -> OPEN_CREATE | OPEN_EDIT -> SUBMITTING -> CLOSED

    A failed submit returns to the open state it came from, keeping the
    draft and exposing the message as `error`. Subclasses provide the
    draft type, validation, payload building and the create/update calls.
    """

    entity = "record"

    def __init__(self) -> None:
        self.state = ModalState.CLOSED
        self.draft: D | None = None
        self.editing_id: int | None = None
        self.error: str | None = None

    @property
    def is_open(self) -> bool:
        return self.state is not ModalState.CLOSED

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def new_draft(self) -> D:
        raise NotImplementedError

    def draft_from(self, record: R) -> D:
        raise NotImplementedError

    def validate(self, draft: D) -> None:
        """Raise ValidationError for the first invalid field."""

    def build_payload(self, draft: D) -> Any:
        raise NotImplementedError

    def create(self, api: ApiClient, payload: Any) -> R:
        raise NotImplementedError

    def update(self, api: ApiClient, record_id: int, payload: Any) -> R:
        raise NotImplementedError

    def open_create(self, **initial: Any) -> D:
        """Open with a fresh draft, optionally pre-filled."""
        draft = self.new_draft()
        for name, value in initial.items():
            setattr(draft, name, value)
        self.draft = draft
        self.editing_id = None
        self.error = None
        self.state = ModalState.OPEN_CREATE
        return draft

    def open_edit(self, record: R) -> D:
        """Open with a draft seeded from an existing record."""
        self.draft = self.draft_from(record)
        self.editing_id = record.id
        self.error = None
        self.state = ModalState.OPEN_EDIT
        return self.draft

    def close(self) -> None:
        """Discard the draft."""
        self.state = ModalState.CLOSED
        self.draft = None
        self.editing_id = None
        self.error = None

    def submit(self, api: ApiClient) -> R:
        """Validate, then call create or update exactly once.

        Raises:
            ValidationError: The draft is invalid; no request was made.
            ApiError: The backend rejected the request; the modal stays open.
        """
        if self.state not in (ModalState.OPEN_CREATE, ModalState.OPEN_EDIT):
            raise RuntimeError(f"Cannot submit {self.entity} form in state {self.state.value}")

        try:
            self.validate(self.draft)
        except ValidationError as e:
            self.error = str(e)
            raise

        payload = self.build_payload(self.draft)
        previous = self.state
        self.state = ModalState.SUBMITTING
        self.error = None

        try:
            if self.editing_id is not None:
                record = self.update(api, self.editing_id, payload)
                logger.info(f"Updated {self.entity} {self.editing_id}")
            else:
                record = self.create(api, payload)
                logger.info(f"Created {self.entity}")
        except ApiError as e:
            self.state = previous
            self.error = str(e)
            raise

        self.close()
        return record


def require(value: Any, message: str) -> None:
    """Raise ValidationError(message) when value is blank or empty."""
    if isinstance(value, str):
        value = value.strip()
    if not value:
        raise ValidationError(message)


def move_item(items: list, from_index: int, to_index: int) -> None:
    """Move one list element to a new position, in place."""
    if from_index == to_index:
        return
    if not (0 <= from_index < len(items) and 0 <= to_index < len(items)):
        raise IndexError(f"Cannot move item {from_index} to {to_index} of {len(items)}")
    items.insert(to_index, items.pop(from_index))
