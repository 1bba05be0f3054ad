from collections import namedtuple
from math import isfinite, pi

import numpy as np

from .errors import InvalidParameterError

MAX_BITS = 32  # widest integer sample supported

SynthesisParameters = namedtuple(
    'SynthesisParameters', 'samplerate bits correction length',
    defaults=(44100.0, 8, 0, 1000))
SynthesisParameters.__doc__ = """Synthesis settings.

samplerate -- Sampling rate (Hz)
bits -- Sample size (bits)
correction -- Frequency correction (%), may be negative
length -- Clip length (ms)
"""


def validate_parameters(params) -> list[str]:
    """Check synthesis parameters. Returns a list of problems, empty if the
    parameters are valid."""
    problems = []
    if not (isfinite(params.samplerate) and params.samplerate > 0):
        problems.append(
            f'Sample rate must be a positive number: {params.samplerate}Hz')
    if params.bits < 2:
        problems.append(f'Sample size must be at least 2 bits: {params.bits}')
    elif params.bits > MAX_BITS:
        problems.append(
            f'Sample size must be at most {MAX_BITS} bits: {params.bits}')
    if params.length < 0:
        problems.append(f'Length must not be negative: {params.length}ms')
    return problems


def sample_count(params) -> int:
    return round(params.samplerate * params.length / 1000)


def correct(frequencies, correction):
    # scale frequencies by correction percentage
    scale = (100 + correction) / 100
    return tuple(f * scale for f in frequencies)


def synthesize(frequencies, params) -> np.ndarray:
    """Synthesize a sum of sine tones as quantized samples.

    frequencies -- Tone frequencies (Hz), e.g. the DTMF row and column tone
    params -- SynthesisParameters

    Each tone gets an equal share of the signed full scale of the sample size.
    Returns read-only int64 array of sample_count(params) samples.
    """
    problems = validate_parameters(params)
    if not frequencies:
        problems.append('No tone frequencies')
    if problems:
        raise InvalidParameterError(problems)

    freqs = correct(frequencies, params.correction)
    peak = (1 << (params.bits - 1)) - 1
    magnitude = peak / len(freqs)

    n = np.arange(sample_count(params))
    x = np.zeros(len(n))
    for f in freqs:
        x += magnitude * np.sin(2 * pi * n * f / params.samplerate)

    samples = np.clip(np.rint(x), -peak - 1, peak).astype(np.int64)
    samples.flags.writeable = False
    return samples
