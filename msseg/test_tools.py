import msseg.eval as mse
import msseg.image as msi
import msseg.segmentation as mss
from msseg.config import Config
from msseg.errors import EmptyInput, InvalidParameter, ShapeMismatch
from msseg.meanshift import MeanShift
import numpy as np
import contextlib
import io
import os
import tempfile
import unittest


class TestImageMethods(unittest.TestCase):

    def test_merge_and_split(self):
        c1 = np.zeros((2, 3))
        c2 = np.ones((2, 3))
        c3 = np.full((2, 3), 7)
        image = msi.merge_channels(c1, c2, c3)
        self.assertEqual(image.shape, (2, 3, 3))
        self.assertEqual(image.dtype, np.float32)
        s1, s2, s3 = msi.split_channels(image)
        np.testing.assert_array_equal(s3, c3)
        np.testing.assert_array_equal(s2, c2)

    def test_merge_rejects_bad_channels(self):
        with self.assertRaises(ShapeMismatch):
            msi.merge_channels(np.zeros((2, 3)), np.zeros((3, 2)), np.zeros((2, 3)))
        with self.assertRaises(ShapeMismatch):
            msi.merge_channels(np.zeros((2, 3, 1)), np.zeros((2, 3)), np.zeros((2, 3)))
        with self.assertRaises(EmptyInput):
            msi.merge_channels(np.zeros((0, 3)), np.zeros((0, 3)), np.zeros((0, 3)))

    def test_quantize(self):
        q = msi.quantize(np.array([[[-3.0, 10.4, 10.6], [254.7, 300.0, 0.0]]]))
        np.testing.assert_array_equal(q, [[[0, 10, 11], [255, 255, 0]]])
        self.assertEqual(q.dtype, np.ubyte)

    def test_convert_to_3channel(self):
        gray = np.arange(6).reshape((2, 3))
        rgb = msi.convert_to_3channel(gray)
        self.assertEqual(rgb.shape, (2, 3, 3))
        np.testing.assert_array_equal(rgb[:, :, 2], gray)
        rgba = np.zeros((2, 3, 4))
        self.assertEqual(msi.convert_to_3channel(rgba).shape, (2, 3, 3))

    def test_write_and_read(self):
        image = np.random.RandomState(4).randint(0, 256, (5, 4, 3)).astype(np.float32)
        with tempfile.TemporaryDirectory() as folder:
            path = os.path.join(folder, 'image.png')
            msi.write(path, image)
            np.testing.assert_array_equal(msi.read(path), image)


class TestEvalMethods(unittest.TestCase):

    def test_segment_sizes(self):
        label_map = np.array([[0, 0, 1], [2, 1, 0]])
        np.testing.assert_array_equal(mse.segment_sizes(label_map), [3, 2, 1])
        self.assertEqual(mse.count_segments(label_map), 3)

    def test_label_image(self):
        label_map = np.array([[0, 1], [1, 2]])
        colored = mse.label_map2label_image(label_map)
        self.assertEqual(colored.shape, (2, 2, 3))
        self.assertEqual(colored.dtype, np.float32)
        np.testing.assert_allclose(colored[0, 0], [153, 228, 128], atol=1e-3)
        np.testing.assert_array_equal(colored[0, 1], colored[1, 0])
        self.assertGreater(np.linalg.norm(colored[0, 1] - colored[1, 1]), 10)
        self.assertGreater(np.linalg.norm(colored[0, 0] - colored[0, 1]), 10)

    def test_print_segment_stats(self):
        image = np.zeros((3, 5, 3), dtype=np.float32)
        image[:, 2, :] = 255
        _, _, counts = mss.label_regions(image, 20.0)
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            mse.print_segment_stats(counts)
        self.assertIn('3 segments, 15 pixels', output.getvalue())


class TestConfig(unittest.TestCase):

    def test_defaults(self):
        config = Config(yaml={'color_bandwidth': 30, 'output': {'folder': 'out'}})
        self.assertEqual(config.bandwidths(), (8.0, 30.0))
        self.assertFalse(config.verbose)
        self.assertEqual(config.output.folder, 'out')
        self.assertFalse(hasattr(config.output, 'spatial_bandwidth'))

    def test_requires_exactly_one_source(self):
        with self.assertRaises(InvalidParameter):
            Config()
        with self.assertRaises(InvalidParameter):
            Config(path='a.yaml', yaml={})

    def test_invalid_bandwidth(self):
        with self.assertRaises(InvalidParameter):
            Config(yaml={'spatial_bandwidth': 0}).bandwidths()

    def test_base_inheritance(self):
        with tempfile.TemporaryDirectory() as folder:
            with open(os.path.join(folder, 'base.yaml'), 'w') as file:
                file.write('spatial_bandwidth: 4\ncolor_bandwidth: 12\n')
            path = os.path.join(folder, 'run.yaml')
            with open(path, 'w') as file:
                file.write('BASE: base.yaml\ncolor_bandwidth: 20\nresult: ~CONFIG/result.png\n')
            config = Config(path=path)
            self.assertEqual(config.bandwidths(), (4.0, 20.0))
            self.assertEqual(config.result, os.path.join(os.path.abspath(folder), 'result.png'))

            mean_shift = MeanShift.from_config(path)
            self.assertEqual((mean_shift.h_s, mean_shift.h_r), (4.0, 20.0))


class TestMeanShift(unittest.TestCase):

    def test_filter_and_segment(self):
        image = np.ones((4, 4, 3), dtype=np.float32) * 200
        image[:2, :2, :] = 10
        mean_shift = MeanShift.from_config(Config(yaml={'spatial_bandwidth': 8, 'color_bandwidth': 50}))
        np.testing.assert_allclose(mean_shift.filter(image), image, atol=1e-3)
        recolored, label_map, num_segments = mean_shift.segment(image)
        self.assertEqual(num_segments, 2)
        self.assertEqual(mse.count_segments(label_map), 2)
        np.testing.assert_array_equal(msi.quantize(recolored), image.astype(np.ubyte))

    def test_rejects_bad_bandwidths(self):
        with self.assertRaises(InvalidParameter):
            MeanShift(0, 10)
        with self.assertRaises(InvalidParameter):
            MeanShift(8, -1)


if __name__ == '__main__':
    unittest.main()
