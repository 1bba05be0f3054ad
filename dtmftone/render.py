import os
import sys
from collections import namedtuple

from . import dtmf, synth, wavfile
from .errors import DTMFError, InvalidParameterError

CHANNELS = 1

RenderResult = namedtuple('RenderResult', 'written failed')


def prepare_output_dir(path):
    """Make sure path is a directory, creating it if it does not exist."""
    if os.path.exists(path) and not os.path.isdir(path):
        raise NotADirectoryError(f'Output path is not a directory: {path}')
    os.makedirs(path, exist_ok=True)
    return path


def output_filename(tone) -> str:
    return f'{dtmf.symbol_name(tone.symbol)}.{wavfile.EXTENSION}'


def check_parameters(params) -> list[str]:
    return synth.validate_parameters(params) + \
        wavfile.validate_format(params.samplerate, params.bits, CHANNELS)


def render_tone(tone, params) -> bytes:
    """Synthesize a tone and return it as WAV container bytes."""
    samples = synth.synthesize(tone.frequencies, params)
    return wavfile.encode(samples, params.samplerate, params.bits, CHANNELS)


def render_symbols(symbols, params, path, keep_going=False, verbose=0):
    """Render each symbol to its own WAV file in the path directory.

    symbols -- Symbols to render, in order
    params -- SynthesisParameters shared by all symbols
    path -- Output directory, created if it does not exist
    keep_going -- If false the first failing symbol aborts the batch and its
                  error is raised. If true failures are collected and the
                  remaining symbols are still rendered.

    Returns RenderResult with the list of (symbol, filepath) written and
    the list of (symbol, exception) failed.
    """
    problems = check_parameters(params)
    if problems:
        raise InvalidParameterError(problems)

    written = []
    failed = []

    def fail(symbol, e):
        if not keep_going:
            raise e
        print(f'ERROR: {symbol} {e}', file=sys.stderr)
        failed.append((symbol, e))

    # resolve every symbol before anything is written
    tones = []
    for symbol in symbols:
        try:
            tones.append((symbol, dtmf.tone(symbol)))
        except DTMFError as e:
            fail(symbol, e)

    if tones:
        prepare_output_dir(path)

    for (symbol, tone) in tones:
        filepath = os.path.join(path, output_filename(tone))
        try:
            container = render_tone(tone, params)
            wavfile.write(filepath, container)
        except (DTMFError, OSError) as e:
            fail(symbol, e)
            continue
        if verbose:
            (fl, fh) = tone.frequencies
            print(f'SYMBOL:"{tone.symbol}" ({fl:.0f}Hz, {fh:.0f}Hz) -> {filepath}')
        if verbose > 1:
            print(f'  {params.samplerate:.0f}Hz {params.bits}bit '
                  f'{params.length}ms correction {params.correction}% '
                  f'{len(container)} bytes')
        written.append((tone.symbol, filepath))

    return RenderResult(written, failed)
