import soundfile


def load_file(filename):
    return soundfile.read(filename, dtype='float32')


def play_audio(effect, wait=True):
    # sounddevice needs PortAudio, only load it when something is played
    import sounddevice
    sounddevice.play(effect[0], effect[1])
    if wait:
        sounddevice.wait()


def play_file(filename):
    play_audio(load_file(filename), wait=True)
