"""File-backed SDSL documents with an explicit open/closed lifecycle."""

import logging
import os
from pathlib import Path
from types import TracebackType
from typing import IO
from typing import Any

import sdsl

logger = logging.getLogger(__name__)

SDSL_SUFFIX = ".sdsl"


class InvalidFileExtensionError(ValueError):
    """Raised when a path does not name an ``.sdsl`` file."""


class SdslFile:
    """
    A parsed SDSL document read from a file or stream.

    The whole source is parsed on construction. ``data`` stays available
    until the document is closed; parse failures propagate as
    ``SDSLDecodeError`` subclasses and leave no document behind.
    """

    def __init__(self, path: str | os.PathLike[str], **kwargs: Any) -> None:
        self.name = os.fspath(path)
        if Path(self.name).suffix != SDSL_SUFFIX:
            raise InvalidFileExtensionError(
                f"{self.name!r} is not an {SDSL_SUFFIX} file"
            )

        logger.info("Parsing SDSL file %s", self.name)
        self._stream: IO[Any] | None = None
        with open(self.name, "rb") as fp:
            self._data: sdsl.SdslDocument | None = sdsl.load(fp, **kwargs)

    @classmethod
    def from_stream(cls, fp: IO[Any], **kwargs: Any) -> "SdslFile":
        """
        Parses an already-open stream.

        The stream is closed if parsing fails; otherwise the returned
        document owns it and closes it in close().
        """
        if not hasattr(fp, "read"):
            raise TypeError("fp must have a read() method")

        document = cls.__new__(cls)
        document.name = str(getattr(fp, "name", "<stream>"))

        logger.info("Parsing SDSL stream %s", document.name)
        try:
            document._data = sdsl.load(fp, **kwargs)
        except Exception:
            logger.debug("Closing %s after failed parse", document.name)
            fp.close()
            raise

        document._stream = fp
        return document

    @property
    def closed(self) -> bool:
        return self._data is None

    @property
    def data(self) -> sdsl.SdslDocument:
        """The parsed document. Unavailable once the file is closed."""
        if self._data is None:
            raise ValueError("I/O operation on closed SDSL file")
        return self._data

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        self._data = None

    def __enter__(self) -> "SdslFile":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<{type(self).__name__} {self.name!r} {state}>"
