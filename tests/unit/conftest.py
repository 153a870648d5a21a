"""Shared fixtures for the unit tests."""

import base64
import io
import json
import os
import tempfile
import zipfile

# Settings are read when biodata.main is imported, so the environment has to
# be in place before any test module imports the application.
_RUNTIME_DIR = tempfile.mkdtemp(prefix="biodata-tests-")
os.environ.setdefault("CONVERT_API_KEY", "test-convert-key")
os.environ.setdefault("PUBLIC_DIR", os.path.join(_RUNTIME_DIR, "public"))
os.environ.setdefault("LOG_DIR", os.path.join(_RUNTIME_DIR, "logs"))

import httpx  # noqa: E402
import pytest  # noqa: E402

TEMPLATE_URL = "https://templates.test/biodata.pptx"
CONVERT_URL = "https://convert.test/convert/pptx/to/png"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"rendered-biodata"

SLIDE_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<p:sld xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main">
  <p:cSld>
    <p:spTree>
      <p:sp>
        <p:txBody>
          <a:p>
            <a:r><a:rPr lang="en-US" b="1"/><a:t>BirthDate</a:t></a:r>
            <a:r><a:rPr lang="en-US"/><a:t>Rasi: X-Rasi</a:t></a:r>
            <a:r><a:rPr lang="en-US"/><a:t>Star: X-Natchathiram</a:t></a:r>
            <a:r><a:rPr lang="en-US" sz="1800"/><a:t>Family details</a:t></a:r>
          </a:p>
        </p:txBody>
      </p:sp>
    </p:spTree>
  </p:cSld>
</p:sld>"""

SLIDE_RELS_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships"><Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="../media/image1.png"/></Relationships>"""

CONTENT_TYPES_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types"><Default Extension="xml" ContentType="application/xml"/><Default Extension="png" ContentType="image/png"/></Types>"""

MEDIA_PNG = b"\x89PNG\r\n\x1a\n" + bytes(range(64))


def build_archive(entries: list[tuple[str, bytes, int]]) -> bytes:
    """Build a ZIP archive from (name, data, compress_type) tuples."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data, compress_type in entries:
            zf.writestr(name, data, compress_type=compress_type)
    return buffer.getvalue()


@pytest.fixture
def pptx_bytes() -> bytes:
    """A minimal PPTX-like archive with one slide and one image."""
    return build_archive(
        [
            ("[Content_Types].xml", CONTENT_TYPES_XML, zipfile.ZIP_DEFLATED),
            ("ppt/slides/slide1.xml", SLIDE_XML, zipfile.ZIP_DEFLATED),
            ("ppt/slides/_rels/slide1.xml.rels", SLIDE_RELS_XML, zipfile.ZIP_DEFLATED),
            ("ppt/media/image1.png", MEDIA_PNG, zipfile.ZIP_STORED),
        ]
    )


class FakeRemote:
    """Fake template host and conversion API behind an httpx.MockTransport."""

    def __init__(self, template: bytes) -> None:
        self.template = template
        self.template_status = 200
        self.convert_status = 200
        self.convert_body: bytes = json.dumps(
            {
                "ConversionCost": 1,
                "Files": [
                    {
                        "FileName": "biodata.png",
                        "FileExt": "png",
                        "FileSize": len(PNG_BYTES),
                        "FileData": base64.b64encode(PNG_BYTES).decode("ascii"),
                    }
                ],
            }
        ).encode("utf-8")
        self.requests: list[httpx.Request] = []
        self.uploads: list[bytes] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == TEMPLATE_URL:
            return httpx.Response(self.template_status, content=self.template)
        if url == CONVERT_URL:
            self.uploads.append(request.read())
            return httpx.Response(
                self.convert_status,
                content=self.convert_body,
                headers={"Content-Type": "application/json"},
            )
        return httpx.Response(404)

    def set_convert_json(self, payload) -> None:
        self.convert_body = json.dumps(payload).encode("utf-8")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def remote(pptx_bytes) -> FakeRemote:
    """Fake outbound services serving the minimal template."""
    return FakeRemote(pptx_bytes)
