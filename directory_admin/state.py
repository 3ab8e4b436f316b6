"""Page state for the directory admin page.

The page keeps a single immutable ``PageState``. Operations never touch its
fields directly: they describe a change as an action and hand it to
``Store.dispatch``, which runs ``reduce`` and swaps in the new state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Tuple, Union

from directory_admin.models.schemas import RowError, UploadHistoryEntry

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class SelectedFile:
    """The file the operator intends to upload or test."""

    name: str
    size: int
    mime_type: str
    read: Callable[[], bytes] = field(compare=False, repr=False)


@dataclass(frozen=True)
class PreviewSummary:
    file_name: str
    file_size: str
    file_type: str


@dataclass(frozen=True)
class StatusMessage:
    text: str
    severity: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class ReportDialog:
    """A modal report waiting to be shown once."""

    title: str
    body: str
    row_errors: Tuple[RowError, ...] = ()


@dataclass(frozen=True)
class PageState:
    selected_file: Optional[SelectedFile] = None
    preview: Optional[PreviewSummary] = None
    message: Optional[StatusMessage] = None
    uploading: bool = False
    upload_progress: int = 0
    history: Tuple[UploadHistoryEntry, ...] = ()
    loading_history: bool = False
    dialog: Optional[ReportDialog] = None
    file_input_key: int = 0


# Actions


@dataclass(frozen=True)
class FileSelected:
    file: SelectedFile
    preview: Optional[PreviewSummary]


@dataclass(frozen=True)
class FileRejected:
    """Drop a rejected candidate from the upload widget."""


@dataclass(frozen=True)
class SelectionCleared:
    pass


@dataclass(frozen=True)
class MessageShown:
    message: StatusMessage


@dataclass(frozen=True)
class MessageDismissed:
    pass


@dataclass(frozen=True)
class MessageExpired:
    now: float


@dataclass(frozen=True)
class UploadStarted:
    pass


@dataclass(frozen=True)
class ProgressChanged:
    progress: int


@dataclass(frozen=True)
class UploadSucceeded:
    pass


@dataclass(frozen=True)
class UploadFinished:
    pass


@dataclass(frozen=True)
class HistoryLoading:
    loading: bool


@dataclass(frozen=True)
class HistoryReplaced:
    entries: Tuple[UploadHistoryEntry, ...]


@dataclass(frozen=True)
class AllDataDeleted:
    pass


@dataclass(frozen=True)
class DialogQueued:
    dialog: ReportDialog


@dataclass(frozen=True)
class DialogTaken:
    pass


Action = Union[
    FileSelected,
    FileRejected,
    SelectionCleared,
    MessageShown,
    MessageDismissed,
    MessageExpired,
    UploadStarted,
    ProgressChanged,
    UploadSucceeded,
    UploadFinished,
    HistoryLoading,
    HistoryReplaced,
    AllDataDeleted,
    DialogQueued,
    DialogTaken,
]


def reduce(state: PageState, action: Action) -> PageState:
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, FileSelected):
        return replace(state, selected_file=action.file, preview=action.preview)
    if isinstance(action, FileRejected):
        return replace(state, file_input_key=state.file_input_key + 1)
    if isinstance(action, SelectionCleared):
        return replace(state, selected_file=None, preview=None)
    if isinstance(action, MessageShown):
        return replace(state, message=action.message)
    if isinstance(action, MessageDismissed):
        return replace(state, message=None)
    if isinstance(action, MessageExpired):
        if state.message is not None and state.message.is_expired(action.now):
            return replace(state, message=None)
        return state
    if isinstance(action, UploadStarted):
        return replace(state, uploading=True, upload_progress=0)
    if isinstance(action, ProgressChanged):
        return replace(state, upload_progress=action.progress)
    if isinstance(action, UploadSucceeded):
        return replace(
            state,
            selected_file=None,
            preview=None,
            file_input_key=state.file_input_key + 1,
        )
    if isinstance(action, UploadFinished):
        return replace(state, uploading=False, upload_progress=0)
    if isinstance(action, HistoryLoading):
        return replace(state, loading_history=action.loading)
    if isinstance(action, HistoryReplaced):
        return replace(state, history=action.entries)
    if isinstance(action, AllDataDeleted):
        return replace(
            state,
            history=(),
            selected_file=None,
            preview=None,
            file_input_key=state.file_input_key + 1,
        )
    if isinstance(action, DialogQueued):
        return replace(state, dialog=action.dialog)
    if isinstance(action, DialogTaken):
        return replace(state, dialog=None)
    raise TypeError(f"Unknown action: {action!r}")


class Store:
    """Holds the current ``PageState`` and applies actions to it."""

    def __init__(self, state: Optional[PageState] = None):
        self.state = state or PageState()

    def dispatch(self, action: Action) -> PageState:
        self.state = reduce(self.state, action)
        return self.state

    def take_dialog(self) -> Optional[ReportDialog]:
        """Return the pending dialog and forget it, so it is shown only once."""
        dialog = self.state.dialog
        if dialog is not None:
            self.dispatch(DialogTaken())
        return dialog
