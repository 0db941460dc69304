from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from library_config import FIRST_ITEM_ID, FIRST_MEMBER_ID
from library_items import BorrowStatus, IdAllocator, LibraryItem, MediaType
from library_members import Member


logger = logging.getLogger("library.manager")


@dataclass
class LibraryStats:
    """
    Snapshot of catalog and roster totals.

    Attributes:
        total_items (int): Number of catalog entries.
        total_members (int): Number of registered members.
        borrowed_items (int): Items whose status is Borrowed.
        by_media_type (Dict[MediaType, int]): Item count per media type, in order
            of first appearance in the catalog.
    """
    total_items: int
    total_members: int
    borrowed_items: int
    by_media_type: Dict[MediaType, int] = field(default_factory=dict)


# Library Core
class LibraryManager:
    """
    Owns the catalog and the member roster and reports on them.

    Report lines go to `report` (print by default); logging is separate.
    """

    def __init__(self, report: Callable[[str], None] = print) -> None:
        self.catalog: List[LibraryItem] = []
        self.members: List[Member] = []
        self.item_ids = IdAllocator(start=FIRST_ITEM_ID)
        self.member_ids = IdAllocator(start=FIRST_MEMBER_ID)
        self.report = report

    # Public API

    def add_item(self, item: LibraryItem) -> None:
        """
        Adds an item to the end of the catalog.
        """
        logger.info("add_item called | id=%s title=%s", item.id, item.title)
        self.catalog.append(item)
        self.report(f"已添加: {item.title}")

    def register_member(self, member: Member) -> None:
        """
        Adds a member to the end of the roster.
        """
        logger.info("register_member called | member_id=%s", member.member_id)
        self.members.append(member)
        self.report(f"已注册会员: {member.name}")

    def find_item_by_id(self, item_id: int) -> Optional[LibraryItem]:
        """
        Returns the first catalog item with the given id, or None.
        """
        return next((item for item in self.catalog if item.id == item_id), None)

    def find_member_by_name(self, name: str) -> Optional[Member]:
        """
        Returns the first member whose name matches case-insensitively, or None.
        """
        wanted = name.lower()
        return next((m for m in self.members if m.name.lower() == wanted), None)

    def group_by_media_type(self) -> Dict[MediaType, List[LibraryItem]]:
        """
        Groups catalog items by media type.

        Groups appear in the order their type is first seen; items keep catalog order.
        """
        groups: Dict[MediaType, List[LibraryItem]] = {}
        for item in self.catalog:
            groups.setdefault(item.media_type, []).append(item)
        return groups

    def get_stats(self) -> LibraryStats:
        """
        Totals, borrowed count and per media type counts for the current catalog.
        """
        borrowed = sum(1 for item in self.catalog if item.status is BorrowStatus.BORROWED)
        return LibraryStats(
            total_items=len(self.catalog),
            total_members=len(self.members),
            borrowed_items=borrowed,
            by_media_type={t: len(items) for t, items in self.group_by_media_type().items()},
        )

    # Reports

    def display_catalog(self) -> None:
        """
        Reports the catalog grouped by media type.
        """
        self.report("\n=== 图书馆目录 ===")

        if not self.catalog:
            self.report("目录为空")
            return

        for media_type, items in self.group_by_media_type().items():
            self.report(f"\n{media_type.value}:")
            for item in items:
                self.report(f"  {item}")

    def display_members(self) -> None:
        """
        Reports each member followed by the items they currently hold.
        """
        self.report("\n=== 注册会员 ===")

        if not self.members:
            self.report("暂无注册会员")
            return

        for member in self.members:
            self.report(str(member))
            member.display_borrowed_items(self.report)
            self.report("")

    def display_stats(self) -> None:
        """
        Reports totals, the borrowed count and the per media type breakdown.
        """
        stats = self.get_stats()

        self.report("\n=== 图书馆统计 ===")
        self.report(f"物品总数: {stats.total_items}")
        self.report(f"注册会员数: {stats.total_members}")
        self.report(f"已借出物品: {stats.borrowed_items}")

        self.report("\n按类型统计:")
        for media_type, count in stats.by_media_type.items():
            self.report(f"  {media_type.value}: {count}件")
