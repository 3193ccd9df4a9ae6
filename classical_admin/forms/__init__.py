"""Entity forms shown in create/edit modals."""

from .album import ALBUM_TYPES, AlbumDraft, AlbumForm
from .artist import ArtistDraft, ArtistForm
from .base import FormModal, ModalState, ValidationError
from .composer import ComposerDraft, ComposerForm
from .composition import CompositionDraft, CompositionForm
from .recording import RecordingDraft, RecordingForm

__all__ = [
    "ALBUM_TYPES",
    "AlbumDraft",
    "AlbumForm",
    "ArtistDraft",
    "ArtistForm",
    "ComposerDraft",
    "ComposerForm",
    "CompositionDraft",
    "CompositionForm",
    "FormModal",
    "ModalState",
    "RecordingDraft",
    "RecordingForm",
    "ValidationError",
]
