import os

from jupyter_core.paths import jupyter_config_path

from traitlets import Unicode, Enum, Bool, List, HasTraits
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound

from .diffing.config import ArrayStrategy, ZeroValueHandling


class DiffitConfigurable(HasTraits):

    def configured_traits(self, cls):
        traits = cls.class_own_traits(config=True)
        c = {}
        for name, _ in traits.items():
            c[name] = getattr(self, name)
        return c


_config_cache = {}
def config_instance(cls):
    if cls in _config_cache:
        return _config_cache[cls]
    instance = _config_cache[cls] = cls()
    return instance


def _load_config_files(basefilename, path=None):
    """Load config files (json) by filename and path.

    yield each config object in turn.
    """

    if not isinstance(path, list):
        path = [path]
    for path in path[::-1]:
        # path list is in descending priority order, so load files backwards:
        loader = JSONFileConfigLoader(basefilename+'.json', path=path)
        config = None
        try:
            config = loader.load_config()
        except ConfigFileNotFound:
            pass
        if config:
            yield config


def recursive_update(target, new, include_none):
    """Recursively update one dictionary using another.

    None values will delete their keys.
    """
    for k, v in new.items():
        if isinstance(v, dict):
            if k not in target:
                target[k] = {}
            recursive_update(target[k], v, include_none)
            if not include_none and not target[k]:
                # Prune empty subdicts
                del target[k]

        elif not include_none and v is None:
            target.pop(k, None)

        else:
            target[k] = v


def config_paths():
    "Directories searched for diffit_config.json, highest priority first."
    path = jupyter_config_path()
    path.insert(0, os.getcwd())
    return path


def build_config(entrypoint, include_none=False):
    if entrypoint not in entrypoint_configurables:
        raise ValueError('Config for entrypoint name %r is not defined! Accepted values are %r.' % (
            entrypoint, list(entrypoint_configurables.keys())
        ))

    # Get config from disk:
    disk_config = {}
    for c in _load_config_files('diffit_config', path=config_paths()):
        recursive_update(disk_config, c, include_none)

    config = {}
    configurable = entrypoint_configurables[entrypoint]
    for c in reversed(configurable.mro()):
        if issubclass(c, DiffitConfigurable):
            recursive_update(config, config_instance(c).configured_traits(c), include_none)
            if (c.__name__ in disk_config):
                recursive_update(config, disk_config[c.__name__], include_none)

    return config


def get_defaults_for_argparse(entrypoint):
    return build_config(entrypoint)


class Global(DiffitConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class _Printing(Global):

    use_color = Bool(
        True,
        help="whether to use ANSI color code escapes for text output.",
    ).tag(config=True)


class Show(_Printing):
    pass


class Diff(_Printing):

    array_strategy = Enum(
        ArrayStrategy.ALL,
        ArrayStrategy.REPLACE,
        help="how arrays are reconciled: replace the whole array, append new "
             "items, smart positional updates, or merge items by identity.",
    ).tag(config=True)

    zero_values = Enum(
        ZeroValueHandling.ALL,
        ZeroValueHandling.AS_SET,
        help="what to do when a field changes to its zero value: "
             "set it, unset it, or ignore the change.",
    ).tag(config=True)

    ignore = List(
        Unicode(),
        default_value=[],
        help="fields to ignore, by name, external name or full path.",
    ).tag(config=True)

    detect_pointer_sharing = Bool(
        False,
        help="fail when the compared documents share mutable objects.",
    ).tag(config=True)


class DiffitShow(Show):
    pass


class DiffitDiff(Diff):
    pass


entrypoint_configurables = {
    'diffit-diff': DiffitDiff,
    'diffit-show': DiffitShow,
}
