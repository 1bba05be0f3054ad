from collections import namedtuple

from .errors import UnknownSymbolError

# DTMF low (row) and high (column) frequencies (Hz)
FREQ_LOW1 = 697.0
FREQ_LOW2 = 770.0
FREQ_LOW3 = 852.0
FREQ_LOW4 = 941.0
FREQ_HIGH1 = 1209.0
FREQ_HIGH2 = 1336.0
FREQ_HIGH3 = 1477.0
FREQ_HIGH4 = 1633.0

LOW_FREQS = (FREQ_LOW1, FREQ_LOW2, FREQ_LOW3, FREQ_LOW4)
HIGH_FREQS = (FREQ_HIGH1, FREQ_HIGH2, FREQ_HIGH3, FREQ_HIGH4)

TONE_TIME = 70e-3  # minimum tone duration (s)

ToneDefinition = namedtuple('ToneDefinition', 'symbol frequencies')

ALL_SYMBOLS = (  # keypad order, row by row
    ToneDefinition('1', (FREQ_LOW1, FREQ_HIGH1)),
    ToneDefinition('2', (FREQ_LOW1, FREQ_HIGH2)),
    ToneDefinition('3', (FREQ_LOW1, FREQ_HIGH3)),
    ToneDefinition('A', (FREQ_LOW1, FREQ_HIGH4)),
    ToneDefinition('4', (FREQ_LOW2, FREQ_HIGH1)),
    ToneDefinition('5', (FREQ_LOW2, FREQ_HIGH2)),
    ToneDefinition('6', (FREQ_LOW2, FREQ_HIGH3)),
    ToneDefinition('B', (FREQ_LOW2, FREQ_HIGH4)),
    ToneDefinition('7', (FREQ_LOW3, FREQ_HIGH1)),
    ToneDefinition('8', (FREQ_LOW3, FREQ_HIGH2)),
    ToneDefinition('9', (FREQ_LOW3, FREQ_HIGH3)),
    ToneDefinition('C', (FREQ_LOW3, FREQ_HIGH4)),
    ToneDefinition('*', (FREQ_LOW4, FREQ_HIGH1)),
    ToneDefinition('0', (FREQ_LOW4, FREQ_HIGH2)),
    ToneDefinition('#', (FREQ_LOW4, FREQ_HIGH3)),
    ToneDefinition('D', (FREQ_LOW4, FREQ_HIGH4))
)

# Symbols that can't be used as they are in file names
SYMBOL_NAMES = {'*': 'star', '#': 'pound'}

_TABLE = {tone.symbol: tone for tone in ALL_SYMBOLS}
_ALIASES = {name: symbol for (symbol, name) in SYMBOL_NAMES.items()}


def tone(symbol) -> ToneDefinition:
    """Return the tone definition of a keypad symbol.

    Letters are case-insensitive and the star and pound keys can also be
    given by name ('star', 'pound').
    """
    if not isinstance(symbol, str):
        raise UnknownSymbolError(symbol)
    key = _ALIASES.get(symbol.lower(), symbol.upper())
    try:
        return _TABLE[key]
    except KeyError:
        raise UnknownSymbolError(symbol) from None


def lookup(symbol) -> tuple[float, float]:
    return tone(symbol).frequencies


def all_symbols() -> tuple[ToneDefinition, ...]:
    return ALL_SYMBOLS


def symbol_name(symbol) -> str:
    # name safe to use as a file name
    return SYMBOL_NAMES.get(symbol, symbol)
