import unittest
from unittest.mock import patch
import os
import sys
import tempfile
from io import BytesIO
from typing import Optional, get_type_hints
from PIL import Image
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from favicon_gen import image_ops
from favicon_gen.errors import SourceNotFoundError, TransformError

TEST_SVG = ('<svg xmlns="http://www.w3.org/2000/svg" width="32" height="32" viewBox="0 0 32 32">'
            '<circle cx="16" cy="16" r="12" fill="#8000ff"/></svg>')


def cairo_available():
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


def png_bytes(size, color):
    buf = BytesIO()
    Image.new('RGBA', (size, size), color).save(buf, format='PNG')
    return buf.getvalue()


class TestImageOps(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.png = os.path.join(self.tmp.name, 'src.png')
        Image.new('RGBA', (40, 40), (128, 0, 255, 191)).save(self.png, dpi=(144, 144))
        self.svg = os.path.join(self.tmp.name, 'src.svg')
        with open(self.svg, 'w', encoding='utf-8') as f:
            f.write(TEST_SVG)

    def tearDown(self):
        self.tmp.cleanup()

    def test_read_metadata_png(self):
        meta = image_ops.read_metadata(self.png)
        self.assertEqual(meta.format, 'png')
        self.assertEqual((meta.width, meta.height), (40, 40))
        self.assertAlmostEqual(meta.density, 144, places=0)
        self.assertFalse(meta.is_vector)

    def write_svg(self, name, text, encoding="utf-8"):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding=encoding) as f:
            f.write(text)
        return path

    def test_read_metadata_svg_with_bom(self):
        path = self.write_svg("bom.svg", TEST_SVG, encoding="utf-8-sig")
        with patch("favicon_gen.image_ops._render_svg", return_value=png_bytes(32, "blue")) as render:
            meta = image_ops.read_metadata(path)
        render.assert_called_once_with(path)
        self.assertTrue(meta.is_vector)
        self.assertEqual((meta.width, meta.height), (32, 32))

    def test_read_metadata_svg_after_long_prolog(self):
        text = '<?xml version="1.0" encoding="UTF-8"?>\n<!-- ' + "x" * 5000 + " -->\n" + TEST_SVG
        path = self.write_svg("prolog.svg", text)
        with patch("favicon_gen.image_ops._render_svg", return_value=png_bytes(32, "blue")):
            meta = image_ops.read_metadata(path)
        self.assertTrue(meta.is_vector)

    def test_read_metadata_xml_that_is_not_svg(self):
        path = self.write_svg("data.xml", "<data><row/></data>")
        with patch("favicon_gen.image_ops._render_svg", side_effect=TransformError("not svg")):
            with self.assertRaises(TransformError):
                image_ops.read_metadata(path)

    def test_density_is_optional(self):
        meta = image_ops.SourceMetadata(path=self.png, format='png', width=1, height=1)
        self.assertIsNone(meta.density)
        self.assertEqual(get_type_hints(image_ops.SourceMetadata)['density'], Optional[float])

    def test_read_metadata_directory(self):
        with self.assertRaises(SourceNotFoundError):
            image_ops.read_metadata(self.tmp.name)

    def test_read_metadata_unreadable_file(self):
        with patch("favicon_gen.image_ops.Image.open", side_effect=PermissionError(13, "Permission denied")):
            with self.assertRaises(SourceNotFoundError) as ctx:
                image_ops.read_metadata(self.png)
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)

    def test_read_metadata_not_an_image(self):
        path = os.path.join(self.tmp.name, 'notes.txt')
        with open(path, 'w') as f:
            f.write('just text')
        with self.assertRaises(TransformError):
            image_ops.read_metadata(path)

    @unittest.skipUnless(cairo_available(), 'cairo library not available')
    def test_read_metadata_svg(self):
        meta = image_ops.read_metadata(self.svg)
        self.assertTrue(meta.is_vector)
        self.assertEqual((meta.width, meta.height), (32, 32))
        self.assertEqual(meta.density, image_ops.SVG_DEFAULT_DENSITY)

    def test_resize_square(self):
        meta = image_ops.read_metadata(self.png)
        data = image_ops.resize_square(self.png, meta, 192)
        with Image.open(BytesIO(data)) as img:
            self.assertEqual(img.format, 'PNG')
            self.assertEqual(img.size, (192, 192))
            self.assertEqual(img.mode, 'RGBA')

    def test_pad_square(self):
        meta = image_ops.read_metadata(self.png)
        data = image_ops.pad_square(self.png, meta, 140, 20, '#f00')
        with Image.open(BytesIO(data)) as img:
            self.assertEqual(img.size, (180, 180))
            self.assertEqual(img.getpixel((5, 5)), (255, 0, 0, 255))
            # centre is the source composited onto the background
            r, g, b, a = img.getpixel((90, 90))
            self.assertEqual(a, 255)
            self.assertGreater(b, 100)

    def test_pad_square_invalid_color(self):
        meta = image_ops.read_metadata(self.png)
        with self.assertRaises(TransformError):
            image_ops.pad_square(self.png, meta, 140, 20, 'not-a-color')

    def test_vector_resize_scales_density(self):
        meta = image_ops.SourceMetadata(path=self.svg, format='svg', width=32, height=32, density=72)
        with patch('favicon_gen.image_ops._render_svg', return_value=png_bytes(128, 'blue')) as render:
            data = image_ops.resize_square(self.svg, meta, 128)

        kwargs = render.call_args.kwargs
        self.assertEqual(kwargs['dpi'], 128 / 32 * 72)
        self.assertEqual(kwargs['output_width'], 128)
        self.assertEqual(kwargs['output_height'], 128)
        with Image.open(BytesIO(data)) as img:
            self.assertEqual(img.size, (128, 128))


if __name__ == '__main__':
    unittest.main()
