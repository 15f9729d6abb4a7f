"""Integration tests reading real BigTIFF files through tifffile.

The files are written with tifffile.TiffWriter, laid out like Ventana
iScan slides: label, thumbnail, then pyramid levels tagged ``level=<n>``.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Callable
from pathlib import Path

import pytest
from fakes import ISCAN_XML, VENTANA_LAYOUT, Layout
from typer.testing import CliRunner

from bifslide.backend import TiffPyramidBackend
from bifslide.cli.main import app
from bifslide.container import TifffileContainer
from bifslide.ventana import (
    BadDataError,
    FormatNotSupportedError,
    TiffAssociatedImage,
    detect,
    open_slide,
    try_ventana,
)

SlideWriter = Callable[..., Path]

pytestmark = pytest.mark.integration


class TestTifffileContainer:
    """Tests for TifffileContainer against a real file."""

    def test_walks_all_directories(self, ventana_slide_path: Path) -> None:
        with TifffileContainer(ventana_slide_path) as container:
            widths = []
            while True:
                widths.append(container.image_width())
                if not container.read_directory():
                    break

        assert widths == [shape[1] for shape, _, _ in VENTANA_LAYOUT]

    def test_reads_tags(self, ventana_slide_path: Path) -> None:
        with TifffileContainer(ventana_slide_path) as container:
            assert container.is_tiled()
            assert container.image_description() == "Label Image"
            assert container.xml_packet() is None

            container.set_directory(2)
            assert container.current_directory() == 2
            assert container.image_width() == 160
            assert container.image_length() == 128
            assert container.tile_width() == 16
            assert container.tile_length() == 16
            assert container.compression() == 1
            assert container.xml_packet() == ISCAN_XML.encode("utf-8")

    def test_uncompressed_codec_configured(self, ventana_slide_path: Path) -> None:
        with TifffileContainer(ventana_slide_path) as container:
            assert container.is_codec_configured(1)
            assert not container.is_codec_configured(12345)

    def test_closed_container_raises(self, ventana_slide_path: Path) -> None:
        container = TifffileContainer(ventana_slide_path)
        container.close()
        container.close()
        with pytest.raises(Exception, match="closed"):
            container.image_width()


class TestOpenSlide:
    """End-to-end tests for open_slide()."""

    def test_round_trip(self, ventana_slide_path: Path) -> None:
        slide = open_slide(ventana_slide_path)

        assert slide.level_directories == (2, 4, 3)
        assert slide.pyramid is not None
        assert slide.pyramid.level_dimensions == ((160, 128), (80, 64), (48, 32))
        assert slide.pyramid.levels[1].downsample == 2.0

        assert slide.properties["openslide.vendor"] == "ventana"
        assert slide.properties["openslide.objective-power"] == "20"
        assert slide.properties["openslide.mpp-x"] == "0.25"
        assert slide.properties["openslide.mpp-y"] == "0.25"
        assert slide.properties["ventana.scan-mode"] == "Regular"

        assert slide.associated_images == {
            "label": TiffAssociatedImage("label", 0, 16, 48),
            "thumbnail": TiffAssociatedImage("thumbnail", 1, 32, 32),
        }

    def test_quickhash_passed_through(self, ventana_slide_path: Path) -> None:
        quickhash = hashlib.sha256()
        slide = open_slide(ventana_slide_path, quickhash)
        assert slide.pyramid is not None
        assert slide.pyramid.quickhash is quickhash

    def test_untiled_file_not_supported(self, slide_writer: SlideWriter) -> None:
        path = slide_writer(tiled=False)
        with pytest.raises(FormatNotSupportedError, match="TIFF is not tiled"):
            open_slide(path)

    def test_missing_marker_not_supported(self, slide_writer: SlideWriter) -> None:
        layout = list(VENTANA_LAYOUT)
        layout[2] = (layout[2][0], layout[2][1], "<EncodeInfo/>")
        with pytest.raises(FormatNotSupportedError, match="Not a Ventana slide"):
            open_slide(slide_writer(layout))

    def test_multiple_iscan_is_bad_data(self, slide_writer: SlideWriter) -> None:
        layout = list(VENTANA_LAYOUT)
        xml = "<EncodeInfo><SlideInfo><iScan/><iScan/></SlideInfo></EncodeInfo>"
        layout[2] = (layout[2][0], layout[2][1], xml)
        with pytest.raises(BadDataError, match="Multiple iScan"):
            open_slide(slide_writer(layout))

    def test_latin1_packet_decoded_by_declaration(
        self, slide_writer: SlideWriter
    ) -> None:
        xml = ISCAN_XML.replace("utf-8", "ISO-8859-1").replace("HE 1", "Bi\u00e9")
        layout = list(VENTANA_LAYOUT)
        layout[2] = (layout[2][0], layout[2][1], xml.encode("latin-1"))

        slide = open_slide(slide_writer(layout))
        assert slide.properties["ventana.slide-annotation"] == "Bi\u00e9"

    def test_only_associated_images_is_bad_data(
        self, slide_writer: SlideWriter
    ) -> None:
        with pytest.raises(BadDataError, match="No pyramid levels found"):
            open_slide(slide_writer(VENTANA_LAYOUT[:2]))


class TestDetect:
    """Tests for detect()."""

    def test_ventana_slide(self, ventana_slide_path: Path) -> None:
        assert detect(ventana_slide_path) is True

    def test_plain_tiled_tiff(self, slide_writer: SlideWriter) -> None:
        layout: Layout = [
            ((32, 32), None, None),
            ((32, 32), None, None),
            ((64, 64), "level=0", None),
        ]
        assert detect(slide_writer(layout)) is False

    def test_malformed_ventana_raises(self, slide_writer: SlideWriter) -> None:
        with pytest.raises(BadDataError):
            detect(slide_writer(VENTANA_LAYOUT[:2]))

    def test_detection_matches_full_read(self, ventana_slide_path: Path) -> None:
        backend = TiffPyramidBackend()
        with TifffileContainer(ventana_slide_path) as container:
            assert try_ventana(container, None, None, None, backend)
        assert backend.pyramid is not None
        assert backend.pyramid.level_directories == (2, 4, 3)


class TestDetectCommand:
    """CLI run against a real file."""

    def test_detect_with_directories(self, ventana_slide_path: Path) -> None:
        result = CliRunner().invoke(
            app, ["detect", str(ventana_slide_path), "--directories", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [level["directory"] for level in data["levels"]] == [2, 4, 3]
        directories = data["directories"]
        assert len(directories) == len(VENTANA_LAYOUT)
        assert directories[0]["slot"] == "label"
        assert directories[2]["annotations"] == {
            "level": "0",
            "mag": "20",
            "quality": "95",
        }
