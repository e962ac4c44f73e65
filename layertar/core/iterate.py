"""Visitor-driven iteration over a tar stream."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Callable, Optional

from ..common.errors import TarVisitError
from ..common.logging_config import get_logger
from .decoder import TarDecoder, TarEntry

_log = get_logger(__name__)


class VisitAction(Enum):
    CONTINUE = "continue"
    STOP = "stop"
    FAIL = "fail"


@dataclass(frozen=True)
class VisitResult:
    """Outcome returned by a tar visitor.

    Use ``VisitResult.CONTINUE``, ``VisitResult.STOP`` or
    ``VisitResult.fail(error)``. Stopping ends the iteration successfully.
    """

    action: VisitAction
    error: Optional[BaseException] = None

    @classmethod
    def fail(cls, error: BaseException) -> "VisitResult":
        return cls(VisitAction.FAIL, error)


VisitResult.CONTINUE = VisitResult(VisitAction.CONTINUE)
VisitResult.STOP = VisitResult(VisitAction.STOP)

TarVisitor = Callable[[TarEntry], Optional[VisitResult]]


def iterate_tar(stream: BinaryIO, visitor: TarVisitor) -> None:
    """
    Invoke `visitor` for each entry of the tar stream, in stream order.

    Iteration ends when the stream is exhausted, when the visitor returns
    ``VisitResult.STOP`` (not an error), or when the visitor fails. A failure,
    returned or raised, is re-raised as :class:`TarVisitError` naming the
    entry. Decode errors from the stream propagate unwrapped. The stream is
    left open.

    Args:
        stream: Readable binary stream holding a tar archive
        visitor: Callable receiving each :class:`TarEntry`; returning None
            is the same as ``VisitResult.CONTINUE``

    Raises:
        TarVisitError: If the visitor fails for an entry
        tarfile.TarError: If the stream cannot be decoded
    """
    decoder = TarDecoder(stream)
    for entry in decoder:
        try:
            result = visitor(entry)
        except Exception as exc:
            raise TarVisitError(entry.name, exc) from exc

        if result is None or result.action is VisitAction.CONTINUE:
            continue
        if result.action is VisitAction.STOP:
            _log.debug("Stopped tar iteration at entry %r (sequence=%d)", entry.name, entry.sequence)
            return
        raise TarVisitError(entry.name, result.error) from result.error
