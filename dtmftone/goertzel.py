from math import cos, pi

from . import dtmf


class Goertzel():
    """Single DFT bin filter.

    f -- Target frequency (Hz)
    N -- Number of samples to collect
    Fs -- Sampling rate (Hz)
    """

    def __init__(self, f, N, Fs):
        # nearest bin to the target frequency
        k = int(0.5 + N * f / Fs)
        self.coeff = 2 * cos(2 * pi * k / N)
        self.f = f
        self.N = N
        self.reset()

    def reset(self):
        self.s1 = 0.0
        self.s2 = 0.0
        self.count = 0

    # Feed one sample. True once N samples are in.
    def update(self, x):
        s = x + self.coeff * self.s1 - self.s2
        self.s2 = self.s1
        self.s1 = s
        self.count += 1
        return self.ready()

    def ready(self):
        return self.count >= self.N

    # Power at the target frequency, normalized by N
    def power(self):
        return (self.s1**2 + self.s2**2 - self.coeff * self.s1 * self.s2) / self.N


def goertzel(f, x, N, Fs):
    """Compute Goertzel algorithm on time series.
    Works best when frequency is integer multiple of Fs/N.

    f -- Target frequency
    x -- Time series
    N -- Time series length
    Fs -- Sampling rate of the time series

    Returns normalized power spectrum DFT term for the target frequency in the signal.
    """
    g = Goertzel(f, N, Fs)
    for n in range(0, N):
        g.update(x[n])
    return g.power()


def _strongest(filters, ratio):
    # strongest tone must stand out from the others in its group
    ranked = sorted(filters, key=lambda g: g.power(), reverse=True)
    (best, second) = (ranked[0].power(), ranked[1].power())
    if best <= 0 or best < ratio * second:
        return None
    return ranked[0].f


class SymbolDetector():
    """Detects the DTMF symbol of audio clips. One filter per DTMF frequency,
    the filters are reset for each clip.

    samplerate -- Sampling rate (Hz)
    N -- Samples analyzed per clip. Default window(samplerate)
    ratio -- How many times stronger the detected row and column tone must be
             than the next strongest tone of the same group
    """

    def __init__(self, samplerate, N=None, ratio=4.0, verbose=0):
        if N is None:
            N = window(samplerate)
        self.N = N
        self.samplerate = samplerate
        self.ratio = ratio
        self.verbose = verbose
        self.low = [Goertzel(f, self.N, samplerate) for f in dtmf.LOW_FREQS]
        self.high = [Goertzel(f, self.N, samplerate) for f in dtmf.HIGH_FREQS]

    def detect(self, samples):
        """Returns the symbol or None if no single row and column tone is found."""
        if self.N <= 0 or len(samples) < self.N:
            return None
        filters = self.low + self.high
        for g in filters:
            g.reset()
        for s in samples[:self.N]:
            s = float(s)
            for g in filters:
                g.update(s)
        if self.verbose:
            for g in filters:
                print(f'{g.f:.0f} {g.power():2.2f}')

        fl = _strongest(self.low, self.ratio)
        fh = _strongest(self.high, self.ratio)
        if fl is None or fh is None:
            return None
        for e in dtmf.all_symbols():
            if e.frequencies == (fl, fh):
                return e.symbol
        return None


def window(samplerate):
    # Number of useable samples depends on the sample rate. Higher sample rates give better accuracy.
    return int(0.9 * dtmf.TONE_TIME * samplerate)


def detect_symbol(samples, samplerate, ratio=4.0, verbose=0):
    """Find the DTMF symbol in an audio clip. Clips shorter than the
    detection window are analyzed over their whole length."""
    N = min(len(samples), window(samplerate))
    if N <= 0:
        return None
    return SymbolDetector(samplerate, N, ratio, verbose).detect(samples)
