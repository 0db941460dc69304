import pytest

from catalog_exceptions import InvalidStateError
from library_items import (
    AudioBook,
    BorrowResult,
    BorrowStatus,
    IdAllocator,
    LibraryItem,
    Magazine,
    MediaType,
    Novel,
    ReferenceBook,
    Textbook,
)


@pytest.fixture
def ids():
    return IdAllocator(start=1)


@pytest.fixture
def novel(ids):
    return Novel.create(ids, "百年孤独", 1967, author="加西亚·马尔克斯", genre="魔幻现实主义")


def test_allocator_is_monotonic_and_never_reuses():
    ids = IdAllocator(start=1001)
    assert ids.peek() == 1001
    assert [ids.next(), ids.next(), ids.next()] == [1001, 1002, 1003]
    assert ids.peek() == 1004


def test_create_assigns_sequential_ids(ids):
    a = Novel.create(ids, "围城", 1947, author="钱钟书", genre="讽刺小说")
    b = Magazine.create(ids, "国家地理", 2023, publisher="国家地理学会", issue_number=245)
    c = Textbook.create(ids, "数据结构与算法", 2020, author="严蔚敏", subject="计算机科学", publisher="清华大学出版社")
    assert (a.id, b.id, c.id) == (1, 2, 3)


def test_separate_allocators_are_independent():
    first = Novel.create(IdAllocator(), "A", 2000)
    second = Novel.create(IdAllocator(), "B", 2000)
    assert first.id == second.id == 1


def test_base_item_is_abstract():
    with pytest.raises(TypeError):
        LibraryItem(id=1, title="x", publication_year=2000)


@pytest.mark.parametrize(
    "cls, media_type",
    [
        (Novel, MediaType.NOVEL),
        (Magazine, MediaType.MAGAZINE),
        (Textbook, MediaType.TEXTBOOK),
        (ReferenceBook, MediaType.REFERENCE_BOOK),
        (AudioBook, MediaType.AUDIO_BOOK),
    ],
)
def test_fresh_item_is_available_with_variant_media_type(ids, cls, media_type):
    item = cls.create(ids, "Title", 2001)
    assert item.status is BorrowStatus.AVAILABLE
    assert item.media_type is media_type


def test_mark_as_borrowed_from_available(novel):
    novel.mark_as_borrowed()
    assert novel.status is BorrowStatus.BORROWED


def test_mark_as_borrowed_twice_raises(novel):
    novel.mark_as_borrowed()
    with pytest.raises(InvalidStateError, match="当前状态不可借出"):
        novel.mark_as_borrowed()
    assert novel.status is BorrowStatus.BORROWED


@pytest.mark.parametrize(
    "status", [BorrowStatus.BORROWED, BorrowStatus.RESERVED, BorrowStatus.UNDER_REPAIR]
)
def test_try_mark_as_borrowed_refuses_non_available(novel, status):
    novel.status = status
    result = novel.try_mark_as_borrowed()
    assert result == BorrowResult.refused("当前状态不可借出")
    assert result.ok is False
    assert novel.status is status


def test_try_mark_as_borrowed_success(novel):
    result = novel.try_mark_as_borrowed()
    assert result.ok is True
    assert result.reason == ""
    assert novel.status is BorrowStatus.BORROWED


@pytest.mark.parametrize("status", list(BorrowStatus))
def test_mark_as_available_always_resets(novel, status):
    novel.status = status
    novel.mark_as_available()
    assert novel.status is BorrowStatus.AVAILABLE


def test_str_combines_id_title_and_media_type(novel):
    assert str(novel) == "1: 百年孤独 (Novel)"


def test_items_compare_by_identity():
    a = Novel(id=7, title="Same", publication_year=2000)
    b = Novel(id=7, title="Same", publication_year=2000)
    assert a != b
    assert a == a


def test_novel_details(novel):
    details = novel.get_details()
    assert details.splitlines() == [
        "小说: 百年孤独",
        "作者: 加西亚·马尔克斯",
        "类型: 魔幻现实主义",
        "出版年份: 1967",
        "状态: Available",
    ]


def test_magazine_details_reflect_current_status(ids):
    mag = Magazine.create(ids, "国家地理", 2023, publisher="国家地理学会", issue_number=245)
    mag.mark_as_borrowed()
    details = mag.get_details()
    assert "杂志: 国家地理" in details
    assert "出版社: 国家地理学会" in details
    assert "期号: 245" in details
    assert details.endswith("状态: Borrowed")


def test_textbook_details(ids):
    book = Textbook.create(
        ids, "C#高级编程", 2022,
        author="Christian Nagel", subject="计算机科学", publisher="清华大学出版社",
    )
    details = book.get_details()
    for expected in ["教科书: C#高级编程", "作者: Christian Nagel", "学科: 计算机科学",
                     "出版社: 清华大学出版社", "出版年份: 2022", "状态: Available"]:
        assert expected in details


def test_extension_variant_details(ids):
    ref = ReferenceBook.create(ids, "现代汉语词典", 2016, author="中国社会科学院", publisher="商务印书馆", edition=7)
    audio = AudioBook.create(ids, "三体", 2019, author="刘慈欣", narrator="冯翔", duration_minutes=1200)
    assert "版次: 7" in ref.get_details()
    assert "朗读者: 冯翔" in audio.get_details()
    assert "时长: 1200分钟" in audio.get_details()
