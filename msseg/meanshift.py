"""Mean-shift filter/segmenter configured once with its bandwidths."""

from msseg.config import Config
from msseg.errors import check_bandwidth
from msseg.eval import print_segment_stats, segment_sizes
from msseg.filtering import mean_shift_filter
from msseg.segmentation import mean_shift_segmentation


class MeanShift(object):

    def __init__(self, h_s, h_r, verbose=False):
        """ Generate a mean-shift object.

        :param h_s: spatial bandwidth (search window half-width in pixels)
        :param h_r: color bandwidth (distance in working color space)
        :param verbose: print progress of filtering and segmentation
        """
        self.h_s = check_bandwidth('h_s', h_s)
        self.h_r = check_bandwidth('h_r', h_r)
        self.verbose = verbose

    @classmethod
    def from_config(cls, config):
        """ Build from a Config object or a path to a yaml config file.
        """
        if not isinstance(config, Config):
            config = Config(path=config)
        h_s, h_r = config.bandwidths()
        return cls(h_s, h_r, verbose=bool(config.verbose))

    def filter(self, image):
        return mean_shift_filter(image, self.h_s, self.h_r, verbose=self.verbose)

    def segment(self, image):
        """Filters and segments image, returns (recolored image, label map, number of segments)."""
        recolored, label_map, num_segments = mean_shift_segmentation(image, self.h_s, self.h_r, verbose=self.verbose)
        if self.verbose:
            print_segment_stats(segment_sizes(label_map))
        return recolored, label_map, num_segments

    def __repr__(self):
        return 'MeanShift(h_s={}, h_r={})'.format(self.h_s, self.h_r)
