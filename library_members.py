from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from library_config import BORROW_LIMIT, JOIN_DATE_FORMAT
from library_items import IdAllocator, LibraryItem


logger = logging.getLogger("library.members")


@dataclass(eq=False)
class Member:
    """
    Represents a library member.

    Attributes:
        member_id (int): Unique member identifier drawn from the roster's IdAllocator.
        name (str): Member name.
        joined_at (datetime): When the member was created.
        _borrowed_items (List[LibraryItem]): Items currently on loan, in borrow order.
            These are references into the catalog, never copies.
    """
    MAX_BORROWED = BORROW_LIMIT

    member_id: int
    name: str
    joined_at: datetime
    _borrowed_items: List[LibraryItem] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def create(
        cls,
        ids: IdAllocator,
        name: str,
        joined_at: Optional[datetime] = None,
    ) -> Member:
        """
        Builds a member with the next id from `ids` and an empty borrowed list.
        """
        if joined_at is None:
            joined_at = datetime.now()
        member = cls(member_id=ids.next(), name=name, joined_at=joined_at)
        logger.info("Member created | member_id=%s name=%s", member.member_id, member.name)
        return member

    @property
    def borrowed_count(self) -> int:
        return len(self._borrowed_items)

    def borrow_item(self, item: LibraryItem) -> str:
        """
        Borrows an item for this member.

        Enforces:
            - at most MAX_BORROWED items held at a time
            - item availability

        Every outcome is reported through the returned message; nothing is raised.
        """
        logger.info("borrow_item called | member_id=%s item_id=%s", self.member_id, item.id)

        if self.borrowed_count >= self.MAX_BORROWED:
            logger.warning(
                "Borrow limit reached | member_id=%s count=%d", self.member_id, self.borrowed_count
            )
            return f"{self.name}，您已借阅{self.borrowed_count}件物品，不能借阅更多。"

        result = item.try_mark_as_borrowed()
        if not result.ok:
            return f"借阅失败: {result.reason}"

        self._borrowed_items.append(item)
        logger.info("Borrow successful | member_id=%s item_id=%s", self.member_id, item.id)
        return f"{self.name} 成功借阅: {item.title}"

    def return_item(self, item: LibraryItem) -> str:
        """
        Returns an item this member holds and makes it Available again.

        Items the member did not borrow are left untouched and reported in the message.
        """
        logger.info("return_item called | member_id=%s item_id=%s", self.member_id, item.id)

        if item not in self._borrowed_items:
            logger.warning(
                "Return refused, not borrowed | member_id=%s item_id=%s", self.member_id, item.id
            )
            return f"{self.name} 并未借阅此物品: {item.title}"

        item.mark_as_available()
        self._borrowed_items.remove(item)
        logger.info("Return successful | member_id=%s item_id=%s", self.member_id, item.id)
        return f"{self.name} 成功归还: {item.title}"

    def get_borrowed_items(self) -> List[LibraryItem]:
        """
        Returns a copy of the borrowed list; changing it does not affect the member.
        """
        return list(self._borrowed_items)

    def describe_borrowed_items(self) -> List[str]:
        """
        Report lines for the borrowed list, or a single "nothing borrowed" line.
        """
        if not self._borrowed_items:
            return [f"{self.name} 目前没有借阅任何物品"]

        lines = [f"{self.name} 的借阅列表:"]
        lines.extend(
            f"  - {item.title} ({item.media_type.value})" for item in self._borrowed_items
        )
        return lines

    def display_borrowed_items(self, report: Callable[[str], None] = print) -> None:
        for line in self.describe_borrowed_items():
            report(line)

    def __str__(self) -> str:
        return f"{self.member_id}: {self.name} (加入日期: {self.joined_at.strftime(JOIN_DATE_FORMAT)})"
