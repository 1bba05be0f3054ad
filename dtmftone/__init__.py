from .errors import DTMFError, InvalidParameterError, UnknownSymbolError, ConfigError
from .dtmf import ToneDefinition, lookup, all_symbols
from .synth import SynthesisParameters, validate_parameters, synthesize
from .wavfile import encode
from .render import RenderResult, render_symbols, prepare_output_dir
