import re

from .errors import ConfigError
from .synth import SynthesisParameters

DEFAULT_SAMPLERATE = 44100.0  # Hz. The all-symbols tool historically used 44000
DEFAULT_BITS = 8
DEFAULT_CORRECTION = 0  # %
DEFAULT_LENGTH = 1000  # ms
DEFAULT_PATH = './audio'

DEFAULTS = {
    'samplerate': DEFAULT_SAMPLERATE,
    'bits': DEFAULT_BITS,
    'correction': DEFAULT_CORRECTION,
    'length': DEFAULT_LENGTH,
    'path': DEFAULT_PATH,
}

CONVERTERS = {
    'samplerate': float,
    'bits': int,
    'correction': int,
    'length': int,
    'path': str,
}

# matches: key:val
kvpre = re.compile(r'^\s*(\w+)\s*:\s*([ -~]+)')
# matches: # comment
commentre = re.compile(r'^\s*#.*$')


def load_config(filename):
    """Load a key:value configuration file. Lines starting with # are comments.

    Returns dictionary of the raw string values.
    """
    config = {}
    if filename:
        with open(filename, 'rt') as file:
            for (lineno, line) in enumerate(file.readlines(), 1):
                line = line.strip()
                # skip empty lines and comments
                if not line or commentre.match(line):
                    continue
                m = kvpre.match(line)
                if not m:
                    raise ConfigError(
                        f'{filename}:{lineno}: Invalid configuration "{line}"')
                key = m[1].lower()
                if key not in DEFAULTS:
                    raise ConfigError(
                        f'{filename}:{lineno}: Unknown configuration key "{m[1]}"')
                config[key] = m[2].strip()
    return config


def resolve(config=None, **overrides):
    """Merge settings. Values given as overrides win over the configuration
    file which wins over the defaults. None overrides are ignored."""
    settings = dict(DEFAULTS)
    for source in (config or {}, overrides):
        for (key, value) in source.items():
            if value is None:
                continue
            if key not in CONVERTERS:
                raise ConfigError(f'Unknown configuration key "{key}"')
            try:
                settings[key] = CONVERTERS[key](value)
            except ValueError:
                raise ConfigError(f'Invalid {key} "{value}"') from None
    return settings


def resolve_parameters(config=None, **overrides):
    """Returns (SynthesisParameters, output path)"""
    settings = resolve(config, **overrides)
    params = SynthesisParameters(samplerate=settings['samplerate'],
                                 bits=settings['bits'],
                                 correction=settings['correction'],
                                 length=settings['length'])
    return (params, settings['path'])
