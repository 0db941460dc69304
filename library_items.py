from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from catalog_exceptions import InvalidStateError
from library_config import FIRST_ITEM_ID


logger = logging.getLogger("library.items")

NOT_BORROWABLE_REASON = "当前状态不可借出"


class MediaType(Enum):
    NOVEL = "Novel"
    MAGAZINE = "Magazine"
    TEXTBOOK = "Textbook"
    REFERENCE_BOOK = "ReferenceBook"
    AUDIO_BOOK = "AudioBook"


class BorrowStatus(Enum):
    AVAILABLE = "Available"
    BORROWED = "Borrowed"
    RESERVED = "Reserved"
    UNDER_REPAIR = "UnderRepair"


class IdAllocator:
    """
    Hands out monotonically increasing integer ids.

    Ids are never reused. Each catalog/roster owns its own allocator so id
    assignment stays deterministic per manager.
    """

    def __init__(self, start: int = FIRST_ITEM_ID) -> None:
        self._next_id = start

    def next(self) -> int:
        allocated = self._next_id
        self._next_id += 1
        return allocated

    def peek(self) -> int:
        return self._next_id


@dataclass(frozen=True)
class BorrowResult:
    """
    Outcome of an attempt to move an item to Borrowed.

    Attributes:
        ok (bool): True if the item is now Borrowed.
        reason (str): Why the attempt was refused; empty on success.
    """
    ok: bool
    reason: str = ""

    @classmethod
    def success(cls) -> BorrowResult:
        return cls(ok=True)

    @classmethod
    def refused(cls, reason: str) -> BorrowResult:
        return cls(ok=False, reason=reason)


# Domain Models
@dataclass(eq=False)
class LibraryItem(ABC):
    """
    Common fields of every catalog entry.

    Attributes:
        id (int): Unique identifier drawn from the catalog's IdAllocator.
        title (str): Item title.
        publication_year (int): Year of publication.
        status (BorrowStatus): Current availability, starts as Available.
    """
    media_type: ClassVar[MediaType]

    id: int
    title: str
    publication_year: int
    status: BorrowStatus = field(default=BorrowStatus.AVAILABLE, init=False)

    @classmethod
    def create(cls, ids: IdAllocator, title: str, publication_year: int, **details):
        """
        Builds an item with the next id from `ids`.

        `details` carries the variant-specific fields (author, genre, ...).
        """
        item = cls(id=ids.next(), title=title, publication_year=publication_year, **details)
        logger.info("Item created | id=%s type=%s title=%s", item.id, item.media_type.value, item.title)
        return item

    @abstractmethod
    def get_details(self) -> str:
        """Returns a multi-line summary of every field plus the current status."""

    def try_mark_as_borrowed(self) -> BorrowResult:
        if self.status is not BorrowStatus.AVAILABLE:
            logger.warning(
                "Borrow refused | id=%s status=%s", self.id, self.status.value
            )
            return BorrowResult.refused(NOT_BORROWABLE_REASON)

        self.status = BorrowStatus.BORROWED
        logger.info("Item marked borrowed | id=%s", self.id)
        return BorrowResult.success()

    def mark_as_borrowed(self) -> None:
        """
        Moves the item from Available to Borrowed.

        Raises:
            InvalidStateError: If the item is not Available.
        """
        result = self.try_mark_as_borrowed()
        if not result.ok:
            raise InvalidStateError(result.reason)

    def mark_as_available(self) -> None:
        # Unconditional: Reserved and UnderRepair are overwritten too.
        self.status = BorrowStatus.AVAILABLE
        logger.info("Item marked available | id=%s", self.id)

    def __str__(self) -> str:
        return f"{self.id}: {self.title} ({self.media_type.value})"


@dataclass(eq=False)
class Novel(LibraryItem):
    media_type: ClassVar[MediaType] = MediaType.NOVEL

    author: str = ""
    genre: str = ""

    def get_details(self) -> str:
        return (
            f"小说: {self.title}\n"
            f"作者: {self.author}\n"
            f"类型: {self.genre}\n"
            f"出版年份: {self.publication_year}\n"
            f"状态: {self.status.value}"
        )


@dataclass(eq=False)
class Magazine(LibraryItem):
    media_type: ClassVar[MediaType] = MediaType.MAGAZINE

    publisher: str = ""
    issue_number: int = 0

    def get_details(self) -> str:
        return (
            f"杂志: {self.title}\n"
            f"出版社: {self.publisher}\n"
            f"期号: {self.issue_number}\n"
            f"出版年份: {self.publication_year}\n"
            f"状态: {self.status.value}"
        )


@dataclass(eq=False)
class Textbook(LibraryItem):
    media_type: ClassVar[MediaType] = MediaType.TEXTBOOK

    author: str = ""
    subject: str = ""
    publisher: str = ""

    def get_details(self) -> str:
        return (
            f"教科书: {self.title}\n"
            f"作者: {self.author}\n"
            f"学科: {self.subject}\n"
            f"出版社: {self.publisher}\n"
            f"出版年份: {self.publication_year}\n"
            f"状态: {self.status.value}"
        )


@dataclass(eq=False)
class ReferenceBook(LibraryItem):
    media_type: ClassVar[MediaType] = MediaType.REFERENCE_BOOK

    author: str = ""
    publisher: str = ""
    edition: int = 1

    def get_details(self) -> str:
        return (
            f"参考书: {self.title}\n"
            f"作者: {self.author}\n"
            f"出版社: {self.publisher}\n"
            f"版次: {self.edition}\n"
            f"出版年份: {self.publication_year}\n"
            f"状态: {self.status.value}"
        )


@dataclass(eq=False)
class AudioBook(LibraryItem):
    media_type: ClassVar[MediaType] = MediaType.AUDIO_BOOK

    author: str = ""
    narrator: str = ""
    duration_minutes: int = 0

    def get_details(self) -> str:
        return (
            f"有声书: {self.title}\n"
            f"作者: {self.author}\n"
            f"朗读者: {self.narrator}\n"
            f"时长: {self.duration_minutes}分钟\n"
            f"出版年份: {self.publication_year}\n"
            f"状态: {self.status.value}"
        )
