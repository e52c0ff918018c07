"""Literal documents and an in-memory EPUB builder shared by the tests."""

import io
import zipfile

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

EMPTY_CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles/>
</container>
"""

CONTENT_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="BookId">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:title>Alice</dc:title>
    <dc:creator opf:role="aut" opf:file-as="Carroll, Lewis">Lewis Carroll</dc:creator>
    <dc:title>Bob</dc:title>
    <dc:creator opf:role="ill">John Tenniel</dc:creator>
    <dc:language>en</dc:language>
    <dc:identifier id="BookId" opf:scheme="UUID">urn:uuid:1234</dc:identifier>
    <meta name="cover" content="cover-image"/>
  </metadata>
  <manifest>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="ch1" href="text/chapter1.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch2" href="text/chapter%202.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch3" href="text/chapter3.xhtml" media-type="application/xhtml+xml"/>
    <item id="cover-image" href="images/cover.png" media-type="image/png"/>
  </manifest>
  <spine toc="ncx">
    <itemref idref="ch1"/>
    <itemref idref="ch2"/>
    <itemref idref="ch3" linear="no"/>
  </spine>
</package>
"""

# Navigation tree [A[B, C], D]
TOC_NCX = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head>
    <meta name="dtb:uid" content="urn:uuid:1234"/>
  </head>
  <docTitle><text>Alice</text></docTitle>
  <navMap>
    <navPoint id="a" playOrder="1">
      <navLabel><text>A</text></navLabel>
      <content src="text/chapter1.xhtml"/>
      <navPoint id="b" playOrder="2">
        <navLabel><text>B</text></navLabel>
        <content src="text/chapter1.xhtml#b"/>
      </navPoint>
      <!-- second child -->
      <navPoint id="c" playOrder="3">
        <navLabel><text>C</text></navLabel>
        <content src="text/chapter%202.xhtml"/>
      </navPoint>
    </navPoint>
    <navPoint id="d" playOrder="4">
      <navLabel><text>D</text></navLabel>
      <content src="text/chapter3.xhtml"/>
    </navPoint>
  </navMap>
</ncx>
"""

NAV_XHTML = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
<head><title>Navigation</title></head>
<body>
  <nav epub:type="landmarks">
    <ol><li><a href="cover.xhtml">Cover</a></li></ol>
  </nav>
  <nav epub:type="toc" id="toc">
    <h1>Contents</h1>
    <ol>
      <li><a href="chapter1.xhtml">Part <em>One</em></a>
        <ol>
          <li><a href="chapter1.xhtml#s1">Section 1</a></li>
        </ol>
      </li>
      <li><span>Appendices</span>
        <ol>
          <li><a href="../appendix.xhtml">Appendix</a></li>
        </ol>
      </li>
    </ol>
  </nav>
</body>
</html>
"""

CHAPTER_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>{title}</title></head>
<body><h1 id="b">{title}</h1><p>{body}</p></body>
</html>
"""

COVER_PNG = b"\x89PNG\r\n\x1a\n" + bytes(range(64))


def chapter(title: str, body: str = "Lorem ipsum") -> str:
    return CHAPTER_TEMPLATE.format(title=title, body=body)


def default_files() -> dict[str, str | bytes]:
    """Archive entries of the reference book."""
    return {
        "META-INF/container.xml": CONTAINER_XML,
        "OEBPS/content.opf": CONTENT_OPF,
        "OEBPS/toc.ncx": TOC_NCX,
        "OEBPS/text/chapter1.xhtml": chapter("Chapter 1", "first-chapter-marker"),
        "OEBPS/text/chapter 2.xhtml": chapter("Chapter 2"),
        "OEBPS/text/chapter3.xhtml": chapter("Chapter 3"),
        "OEBPS/images/cover.png": COVER_PNG,
    }


def build_epub(
    files: dict[str, str | bytes] | None = None,
    compression: int = zipfile.ZIP_DEFLATED,
) -> bytes:
    """Build an EPUB archive in memory.

    The mimetype entry is always written first and uncompressed.
    """
    if files is None:
        files = default_files()

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        for name, content in files.items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            archive.writestr(name, content, compress_type=compression)
    return buffer.getvalue()


def package_opf(manifest: str, spine: str, metadata: str = "", spine_attrs: str = "") -> str:
    """Small package document from manifest/spine/metadata fragments."""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:uuid:5678</dc:identifier>
    {metadata}
  </metadata>
  <manifest>
    {manifest}
  </manifest>
  <spine{spine_attrs}>
    {spine}
  </spine>
</package>
"""
