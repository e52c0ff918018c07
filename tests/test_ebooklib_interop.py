"""Read back a book written by ebooklib."""

from pathlib import Path

import pytest
from ebooklib import epub

from epub_decoder import open_epub


def create_test_epub(epub_path: Path, chapters: list[dict[str, str]]) -> None:
    """Create a test EPUB file with specified chapter content.

    Args:
        epub_path: Path where the EPUB will be saved
        chapters: List of dicts with 'title' and 'content' keys
    """
    book = epub.EpubBook()
    book.set_identifier("test-book-123")
    book.set_title("Test Book")
    book.set_language("en")
    book.add_author("Test Author")

    spine: list[str | epub.EpubHtml] = ["nav"]
    toc: list[epub.EpubHtml] = []

    for i, chapter_data in enumerate(chapters, 1):
        chapter = epub.EpubHtml(
            title=chapter_data["title"],
            file_name=f"chapter_{i}.xhtml",
            lang="en",
        )
        chapter.set_content(
            f"""<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>{chapter_data["title"]}</title></head>
<body>
{chapter_data["content"]}
</body>
</html>""".encode()
        )
        book.add_item(chapter)
        spine.append(chapter)
        toc.append(chapter)

    book.toc = toc
    book.spine = spine
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())

    epub.write_epub(str(epub_path), book)


@pytest.fixture
def written_book(tmp_path: Path) -> Path:
    path = tmp_path / "ebooklib.epub"
    create_test_epub(
        path,
        [
            {"title": "Opening", "content": "<p>First words.</p>"},
            {"title": "Middle", "content": "<p>Second words.</p>"},
            {"title": "Ending", "content": "<p>Last words.</p>"},
        ],
    )
    return path


class TestEbooklibBook:
    """Test decoding an archive produced by a third-party writer."""

    def test_metadata(self, written_book: Path):
        with open_epub(written_book) as book:
            assert book.metadata("title") == ["Test Book"]
            assert book.metadata("language") == ["en"]
            assert book.metadata("creator") == ["Test Author"]
            assert book.metadata("identifier") == ["test-book-123"]

    def test_navigation_titles(self, written_book: Path):
        with open_epub(written_book) as book:
            nav = book.navigation()
            titles = [nav.title]
            while not nav.is_last:
                nav.next()
                titles.append(nav.title)

        assert titles == ["Opening", "Middle", "Ending"]

    def test_navigation_urls_open(self, written_book: Path):
        with open_epub(written_book) as book:
            for point in book.toc:
                assert b"words." in book.read_file(point.target)

    def test_spine_opens_every_item(self, written_book: Path):
        with open_epub(written_book) as book:
            contents = []
            for item in book.spine():
                with item.open() as stream:
                    contents.append(stream.read())

        assert len(contents) == 4
        assert b"Second words." in contents[2]
