"""List page controller shared by the five catalog pages."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from ..forms.base import FormModal, ValidationError
from ..services.api_client import ApiClient, ApiError
from ..services.page_state import PageState, PageStateStore

logger = logging.getLogger(__name__)

R = TypeVar("R")

# Asks the user a yes/no question; True means go ahead
Confirm = Callable[[str], bool]
# Switches to another page by route name
Navigate = Callable[[str], None]

# Page size used wherever a page needs "everything"
FETCH_ALL_LIMIT = 1000


def decline(message: str) -> bool:
    return False


def stay(route: str) -> None:
    logger.debug(f"No navigator attached, staying off {route}")


class ListPage(Generic[R]):
    """A table of records with a create/edit modal and confirmed deletes.

    Every fetch error is caught and kept as `error` for display; the page
    then keeps its previous rows. Subclasses implement fetch(), rows() and
    the delete call, and may hook after_load() to persist page state.
    """

    route = ""
    entity = "record"

    def __init__(
        self,
        api: ApiClient,
        form: FormModal,
        store: PageStateStore | None = None,
        confirm: Confirm = decline,
        navigate: Navigate = stay,
    ) -> None:
        self.api = api
        self.form = form
        self.store = store if store is not None else PageStateStore()
        self.confirm = confirm
        self.navigate = navigate
        self.items: list[R] = []
        self.loading = False
        self.error: str | None = None

    def fetch(self) -> list[R]:
        raise NotImplementedError

    def delete_record(self, record_id: int) -> None:
        raise NotImplementedError

    def delete_message(self, record: R) -> str:
        return f"Delete this {self.entity}?"

    def rows(self) -> list[dict[str, Any]]:
        raise NotImplementedError

    def after_load(self) -> None:
        """Called after each successful fetch."""

    def mount(self) -> None:
        """Initial load when the page is opened."""
        self.refresh()

    def refresh(self) -> list[R]:
        self.loading = True
        try:
            self.items = self.fetch()
            self.error = None
            self.after_load()
        except ApiError as e:
            logger.error(f"Failed to load {self.entity} list: {e}")
            self.error = str(e)
        finally:
            self.loading = False
        return self.items

    def clear_error(self) -> None:
        self.error = None

    def delete(self, record: R) -> bool:
        """Delete after confirmation, then re-fetch.

        Returns:
            True if the record was deleted. A declined confirmation makes no
            request at all.
        """
        if not self.confirm(self.delete_message(record)):
            return False

        try:
            self.delete_record(record.id)
        except ApiError as e:
            logger.error(f"Failed to delete {self.entity} {record.id}: {e}")
            self.error = str(e)
            return False

        logger.info(f"Deleted {self.entity} {record.id}")
        self.refresh()
        return True

    def open_create(self, **initial: Any) -> None:
        self.form.open_create(**initial)

    def open_edit(self, record: R) -> None:
        self.form.open_edit(record)

    def close_modal(self) -> None:
        self.form.close()

    def submit(self) -> R | None:
        """Submit the open form; on success refresh the list once."""
        try:
            record = self.form.submit(self.api)
        except (ValidationError, ApiError) as e:
            self.error = str(e)
            return None

        self.refresh()
        return record

    def navigate_with_state(self, route: str, build_state: Callable[[], PageState]) -> None:
        """Pre-compute the target page's state, save it, then navigate.

        A failed prefetch is logged and the navigation still happens; the
        target page then opens with whatever state it had before.
        """
        try:
            self.store.save_state(build_state())
        except ApiError as e:
            logger.error(f"Failed to prepare {route} page: {e}")
        self.navigate(route)
