import os

import pytest

from dtmftone import dtmf, render, wavfile
from dtmftone.errors import InvalidParameterError, UnknownSymbolError
from dtmftone.synth import SynthesisParameters

PARAMS = SynthesisParameters(8000, 16, 0, 50)


def test_prepare_output_dir(tmp_path):
    path = str(tmp_path / 'a' / 'b')
    assert render.prepare_output_dir(path) == path
    assert os.path.isdir(path)
    # existing directory is fine
    render.prepare_output_dir(path)


def test_prepare_output_dir_not_a_directory(tmp_path):
    path = tmp_path / 'file'
    path.write_bytes(b'')
    with pytest.raises(NotADirectoryError):
        render.prepare_output_dir(str(path))


def test_output_filename():
    assert render.output_filename(dtmf.tone('5')) == '5.wav'
    assert render.output_filename(dtmf.tone('*')) == 'star.wav'
    assert render.output_filename(dtmf.tone('#')) == 'pound.wav'


def test_render_tone():
    container = render.render_tone(dtmf.tone('5'), PARAMS)
    assert len(container) == 44 + 2 * 400
    assert container[:4] == b'RIFF'


def test_render_symbol(tmp_path):
    path = str(tmp_path / 'out')
    result = render.render_symbols(['5'], PARAMS, path)
    filepath = os.path.join(path, '5.wav')
    assert result.written == [('5', filepath)]
    assert result.failed == []
    with open(filepath, 'rb') as file:
        assert file.read() == render.render_tone(dtmf.tone('5'), PARAMS)


def test_render_all_symbols(tmp_path):
    path = str(tmp_path)
    symbols = [tone.symbol for tone in dtmf.all_symbols()]
    result = render.render_symbols(symbols, PARAMS, path)
    assert [symbol for (symbol, _) in result.written] == symbols
    assert len(os.listdir(path)) == 16
    assert 'star.wav' in os.listdir(path)
    assert 'pound.wav' in os.listdir(path)


def test_render_alias_symbol(tmp_path):
    result = render.render_symbols(['star', 'b'], PARAMS, str(tmp_path))
    assert [symbol for (symbol, _) in result.written] == ['*', 'B']


def test_unknown_symbol_aborts_before_writing(tmp_path):
    path = str(tmp_path / 'out')
    with pytest.raises(UnknownSymbolError):
        render.render_symbols(['1', 'X', '2'], PARAMS, path)
    assert not os.path.exists(path)


def test_unknown_symbol_keep_going(tmp_path, capsys):
    path = str(tmp_path)
    result = render.render_symbols(['1', 'X', '2'], PARAMS, path,
                                   keep_going=True)
    assert [symbol for (symbol, _) in result.written] == ['1', '2']
    assert len(result.failed) == 1
    (symbol, e) = result.failed[0]
    assert symbol == 'X'
    assert isinstance(e, UnknownSymbolError)
    assert 'ERROR: X' in capsys.readouterr().err


@pytest.mark.parametrize('params', [
    SynthesisParameters(0, 16, 0, 50),
    SynthesisParameters(8000, 12, 0, 50),
    SynthesisParameters(8000, 16, 0, -50),
])
def test_invalid_parameters_write_nothing(tmp_path, params):
    path = str(tmp_path / 'out')
    with pytest.raises(InvalidParameterError):
        render.render_symbols(['1'], params, path, keep_going=True)
    assert not os.path.exists(path)


def test_path_not_a_directory(tmp_path):
    path = tmp_path / 'file'
    path.write_bytes(b'')
    with pytest.raises(NotADirectoryError):
        render.render_symbols(['1'], PARAMS, str(path))


def failing_write(symbol):
    write = wavfile.write

    def fake_write(filepath, container):
        if os.path.basename(filepath) == f'{symbol}.wav':
            raise PermissionError(f'Permission denied: {filepath}')
        write(filepath, container)
    return fake_write


def test_write_failure_aborts(tmp_path, monkeypatch):
    monkeypatch.setattr(wavfile, 'write', failing_write('2'))
    with pytest.raises(PermissionError):
        render.render_symbols(['1', '2', '3'], PARAMS, str(tmp_path))
    assert os.listdir(tmp_path) == ['1.wav']


def test_write_failure_keep_going(tmp_path, monkeypatch):
    monkeypatch.setattr(wavfile, 'write', failing_write('2'))
    result = render.render_symbols(['1', '2', '3'], PARAMS, str(tmp_path),
                                   keep_going=True)
    assert [symbol for (symbol, _) in result.written] == ['1', '3']
    assert [symbol for (symbol, _) in result.failed] == ['2']
    assert sorted(os.listdir(tmp_path)) == ['1.wav', '3.wav']


def test_verbose(tmp_path, capsys):
    render.render_symbols(['5'], PARAMS, str(tmp_path), verbose=2)
    out = capsys.readouterr().out
    assert 'SYMBOL:"5" (770Hz, 1336Hz)' in out
    assert '8000Hz 16bit 50ms' in out
