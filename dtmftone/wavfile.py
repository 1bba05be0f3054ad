import os
import struct
from math import isfinite

import numpy as np
import soundfile as sf

from .errors import InvalidParameterError

# Canonical WAV layout. All fields little-endian.
#
# 4B: "RIFF"
# 4B: RIFF chunk size (36 + data size + pad)
# 4B: "WAVE"
# 4B: "fmt "
# 4B: fmt chunk size (16)
# 2B: format tag (1, PCM)
# 2B: channels
# 4B: sample rate
# 4B: byte rate (sample rate * block align)
# 2B: block align (channels * bytes per sample)
# 2B: bits per sample
# 4B: "data"
# 4B: data size
# ..: samples, 8-bit unsigned, wider signed. Odd data size padded with 0.
HEADER = struct.Struct('<4sI4s4sIHHIIHH4sI')
HEADER_SIZE = HEADER.size  # 44
WAVE_FORMAT_PCM = 1
EXTENSION = 'wav'
SAMPLE_SIZES = (8, 16, 24, 32)


def validate_format(samplerate, bits, channels=1) -> list[str]:
    """Check that the format can be stored. Returns a list of problems."""
    problems = []
    if bits not in SAMPLE_SIZES:
        problems.append(f'Unsupported WAV sample size {bits} bits. '
                        f'Supported sizes {", ".join(map(str, SAMPLE_SIZES))}')
    if channels < 1:
        problems.append(f'Invalid channel count {channels}')
    if not isfinite(samplerate) or round(samplerate) <= 0:
        problems.append(f'Invalid WAV sample rate {samplerate}Hz')
    return problems


def encode(samples, samplerate, bits, channels=1) -> bytes:
    """Build WAV container bytes from integer samples.

    samples -- Sample values in the signed range of the sample size. For more
               than one channel samples are interleaved frame by frame.
    samplerate -- Sampling rate (Hz). Stored rounded to an integer.
    bits -- Sample size: 8, 16, 24 or 32
    channels -- Number of channels
    """
    problems = validate_format(samplerate, bits, channels)
    if problems:
        raise InvalidParameterError(problems)
    rate = int(round(samplerate))

    x = np.asarray(samples, dtype=np.int64).reshape(-1)
    if len(x) % channels:
        raise InvalidParameterError(
            f'{len(x)} samples is not a whole number of {channels} channel frames')

    data = pack_samples(x, bits)
    blockalign = channels * bits // 8
    pad = b'\x00' if len(data) % 2 else b''
    header = HEADER.pack(b'RIFF', 36 + len(data) + len(pad), b'WAVE',
                         b'fmt ', 16, WAVE_FORMAT_PCM, channels, rate,
                         rate * blockalign, blockalign, bits,
                         b'data', len(data))
    return header + data + pad


def pack_samples(x, bits) -> bytes:
    lo = -(1 << (bits - 1))
    hi = (1 << (bits - 1)) - 1
    x = np.clip(x, lo, hi)
    if bits == 8:
        # 8-bit WAV data is unsigned, offset by 128
        return (x + 128).astype(np.uint8).tobytes()
    if bits == 16:
        return x.astype('<i2').tobytes()
    if bits == 24:
        # low three bytes of each little-endian 32-bit value
        b = x.astype('<i4').view(np.uint8).reshape(-1, 4)
        return b[:, :3].tobytes()
    return x.astype('<i4').tobytes()


def write(path, container):
    """Write container bytes to path. The file is written under a temporary
    name and renamed, so a failed write never leaves a partial file."""
    tmppath = f'{path}.tmp'
    try:
        with open(tmppath, 'wb') as file:
            file.write(container)
        os.replace(tmppath, path)
    except BaseException:
        if os.path.exists(tmppath):
            os.unlink(tmppath)
        raise


def read(path, dtype='int16'):
    return sf.read(path, dtype=dtype)
