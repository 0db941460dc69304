from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from catalog_exceptions import LibraryError
from library_config import configure_logging
from library_items import Magazine, Novel, Textbook
from library_manager import LibraryManager
from library_members import Member


logger = logging.getLogger("library.demo")


def seed_catalog(library: LibraryManager) -> None:
    """
    Adds the five sample items: two novels, one magazine and two textbooks.
    """
    ids = library.item_ids
    library.add_item(Novel.create(ids, "百年孤独", 1967, author="加西亚·马尔克斯", genre="魔幻现实主义"))
    library.add_item(Novel.create(ids, "围城", 1947, author="钱钟书", genre="讽刺小说"))
    library.add_item(Magazine.create(ids, "国家地理", 2023, publisher="国家地理学会", issue_number=245))
    library.add_item(
        Textbook.create(
            ids, "C#高级编程", 2022,
            author="Christian Nagel", subject="计算机科学", publisher="清华大学出版社",
        )
    )
    library.add_item(
        Textbook.create(
            ids, "数据结构与算法", 2020,
            author="严蔚敏", subject="计算机科学", publisher="清华大学出版社",
        )
    )


def run_demo(library: Optional[LibraryManager] = None) -> LibraryManager:
    """
    Main driver that walks through the catalog and borrowing operations.

    Demonstrated scenarios:
        - populating the catalog and registering members
        - catalog and statistics reports
        - successful borrows
        - borrow refused by the 3 item limit
        - another member borrowing the refused item
        - returning an item
        - item details
    """
    if library is None:
        library = LibraryManager()
    report = library.report

    report("欢迎使用图书馆管理系统!")
    report("=====================\n")

    # 1. Populate
    seed_catalog(library)

    alice = Member.create(library.member_ids, "张三")
    bob = Member.create(library.member_ids, "李四")
    library.register_member(alice)
    library.register_member(bob)

    # 2. Reports before borrowing
    library.display_catalog()
    library.display_stats()

    report("\n=== 借阅操作演示 ===")

    # 3. 张三 borrows up to the limit, the fourth is refused
    item1 = library.find_item_by_id(1)
    if item1 is not None:
        report(alice.borrow_item(item1))

    item2 = library.find_item_by_id(3)
    if item2 is not None:
        report(alice.borrow_item(item2))

    item3 = library.find_item_by_id(4)
    if item3 is not None:
        report(alice.borrow_item(item3))

    item4 = library.find_item_by_id(2)
    if item4 is not None:
        report(alice.borrow_item(item4))

    # 4. 李四 takes the item 张三 could not
    if item4 is not None:
        report(bob.borrow_item(item4))

    library.display_members()

    # 5. Return and report again
    if item1 is not None:
        report(alice.return_item(item1))

    library.display_members()
    library.display_stats()

    if item4 is not None:
        report("\n=== 物品详细信息 ===")
        report(item4.get_details())

    report("\n感谢使用图书馆管理系统!")
    return library


# CLI / Main
def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the library catalog demonstration.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for the library loggers (report output is unaffected)",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        run_demo()
    except LibraryError as e:
        logger.error("LibraryError bubbled to top-level | %s", e)
        raise
    except Exception as e:
        logger.exception("Unhandled fatal error | %s", e)
        raise


if __name__ == "__main__":
    main()
