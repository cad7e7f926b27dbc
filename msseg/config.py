from yaml import load, Loader
import os

from msseg.errors import InvalidParameter, check_bandwidth

DEFAULTS = {'spatial_bandwidth': 8,
            'color_bandwidth': 16,
            'verbose': False}


class Config(object):

    def __init__(self, path=None, yaml=None, root="", verbose=False, defaults=True):
        """ Generate config object.
        Either path or yaml dict has to be provided.
        All configurations can be accessed in object style, missing mean-shift
        settings are taken from DEFAULTS.
        BASE config will only be considered if the path is given.

        :param path: path to a config file
        :param yaml: yaml data as dict
        :param root: root of the config (will be automatically identified if path is given and used to replace ~CONFIG)
        :param verbose: print inherited base configs
        :param defaults: fill in missing mean-shift settings (off for nested sections)
        """

        if (path is None) == (yaml is None):
            raise InvalidParameter("Either path or yaml dict has to be provided")
        self.defaults = defaults
        self.absfile = None
        if path is not None:
            with open(path, 'r') as file:
                self.absfile = os.path.abspath(path)
                self.root = os.path.dirname(self.absfile)
                self.raw = file.read()
                self.raw = self.raw.replace("~CONFIG", self.root)
                self.yaml = load(self.raw, Loader) or {}
        else:
            self.yaml = yaml
            self.raw = ""
            self.root = root

        if not isinstance(self.yaml, dict):
            raise InvalidParameter("config must be a mapping, got {}".format(type(self.yaml).__name__))

        if 'BASE' in self.yaml and path is not None:
            base_path = os.path.join(self.root, self.yaml['BASE'])
            if verbose: print('inheriting config from', base_path)
            base = Config(path=base_path, verbose=verbose)
            self.join_base(base)
        else:
            self.set_attributes()

    def set_attributes(self):
        """ Transform yaml to attributes
        """

        if self.defaults:
            for key, v in DEFAULTS.items():
                setattr(self, key, v)
        for key, v in self.yaml.items():
            if key == 'BASE': continue
            if isinstance(v, (list, tuple)):
                setattr(self, key, [Config(yaml=x, root=self.root, defaults=False) if isinstance(x, dict) else x for x in v])
            else:
                setattr(self, key, Config(yaml=v, root=self.root, defaults=False) if isinstance(v, dict) else v)

    def join_base(self, base):
        """ Update this config with base yaml file.
        Shared arguments will be overwritten by self

        :param base: base config object to be joined
        """
        self.raw = f'#INHERITED FROM {base.absfile}\n{base.raw}\n#END INHERITANCE\n\n{self.raw}'
        self.yaml = load(self.raw, Loader)
        self.set_attributes()

    def bandwidths(self):
        """Validated (h_s, h_r) pair."""
        return (check_bandwidth('spatial_bandwidth', self.spatial_bandwidth),
                check_bandwidth('color_bandwidth', self.color_bandwidth))

    def __str__(self):
        return self.raw
