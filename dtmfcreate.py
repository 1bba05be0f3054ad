#!python

import argparse
import sys

from dtmftone import dtmf, player, render, wavfile
from dtmftone import config as cfg
from dtmftone.errors import DTMFError
from dtmftone.goertzel import SymbolDetector, window

# Renders DTMF tones to WAV files, one file per symbol.
#
# $ python dtmfcreate.py -p tones 5          # tones/5.wav
# $ python dtmfcreate.py -a -r 8000 -s 16 -l 100 -p tones
#
# Files are named by symbol, star and pound keys as star.wav and pound.wav.

DEFAULT_SYMBOLS = ['2']

verbosef = 0


def debug(n, *args, **kwargs):
    if verbosef >= n:
        print(*args, **kwargs)


def verify(written, verbose):
    # decode rendered files and check that each contains its own symbol
    errors = 0
    detectors = {}  # reused for all files of the same sample rate and window
    for (symbol, filepath) in written:
        (data, fs) = wavfile.read(filepath, dtype='float32')
        N = min(len(data), window(fs))
        found = None
        if N > 0:
            if (fs, N) not in detectors:
                detectors[(fs, N)] = SymbolDetector(fs, N, verbose=verbose > 1)
            found = detectors[(fs, N)].detect(data)
        if found == symbol:
            debug(1, f'VERIFY {filepath} OK')
        else:
            print(f'ERROR: {filepath} decoded as "{found}", expected "{symbol}"',
                  file=sys.stderr)
            errors += 1
    return errors


def main(argv=None):
    parser = argparse.ArgumentParser(description='DTMF tone creator')
    parser.add_argument('-v', '--verbose', default=0,
                        action='count', help='verbose mode')
    parser.add_argument('-r', '--samplerate', metavar='HZ',
                        help=f'Sample rate (Hz). Default {cfg.DEFAULT_SAMPLERATE:.0f}')
    parser.add_argument('-s', '--bits', metavar='BITS',
                        help=f'Sample size (bits). Default {cfg.DEFAULT_BITS}')
    parser.add_argument('-c', '--correction', metavar='PERCENT',
                        help=f'Frequency correction (%%). Default {cfg.DEFAULT_CORRECTION}')
    parser.add_argument('-l', '--length', metavar='MS',
                        help=f'Tone length (ms). Default {cfg.DEFAULT_LENGTH}')
    parser.add_argument('-p', '--path', metavar='DIR',
                        help=f'Output directory. Default {cfg.DEFAULT_PATH}')
    parser.add_argument('-m', '--config', metavar='FILE',
                        help='Configuration file with key: value lines')
    parser.add_argument('-a', '--all', action='store_true',
                        help='Render all 16 symbols')
    parser.add_argument('-k', '--keep-going', action='store_true',
                        help='Continue with remaining symbols after a failure')
    parser.add_argument('--verify', action='store_true',
                        help='Decode rendered files and check the symbol')
    parser.add_argument('--play', action='store_true',
                        help='Play rendered files')
    parser.add_argument('symbols', nargs='*', metavar='SYMBOL',
                        help='Symbols to render: 0-9, A-D, * (star), # (pound)')
    args = parser.parse_args(argv)

    global verbosef
    verbosef = args.verbose

    if args.all and args.symbols:
        parser.error('Give either symbols or --all')
    if args.all:
        symbols = [tone.symbol for tone in dtmf.all_symbols()]
    else:
        symbols = args.symbols or DEFAULT_SYMBOLS

    try:
        config = cfg.load_config(args.config)
        (params, path) = cfg.resolve_parameters(
            config, samplerate=args.samplerate, bits=args.bits,
            correction=args.correction, length=args.length, path=args.path)
    except (DTMFError, OSError) as e:
        parser.error(str(e))

    problems = render.check_parameters(params)
    if problems:
        parser.error('\n'.join(problems))
    debug(1, f'Sample rate {params.samplerate:.0f}Hz, {params.bits} bits, '
          f'{params.length}ms, correction {params.correction}%')

    try:
        result = render.render_symbols(symbols, params, path,
                                       keep_going=args.keep_going,
                                       verbose=args.verbose)
    except (DTMFError, OSError) as e:
        print(f'ERROR: {e}', file=sys.stderr)
        return 1

    errors = len(result.failed)
    if args.verify:
        errors += verify(result.written, args.verbose)
    if args.play:
        for (_, filepath) in result.written:
            debug(1, f'PLAY {filepath}')
            player.play_file(filepath)

    print(f'{len(result.written)} files written to {path}')
    return 1 if errors else 0


if __name__ == '__main__':
    sys.exit(main())
