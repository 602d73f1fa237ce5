from wormarena.mixer import (
    CHANNEL_COUNT,
    Mixer,
    MixerSoundPlayer,
    NullSoundPlayer,
    Sound,
)


def test_empty_mix_is_silent_and_advances_time():
    m = Mixer()
    assert m.mix(5) == [0] * 5
    assert m.now() == 5


def test_sound_plays_once_then_channel_frees():
    m = Mixer()
    h = m.add(Sound([1000] * 4), m.now(), "shot")
    assert h == "shot"
    assert m.is_playing("shot")
    assert m.mix(6) == [1000] * 4 + [0, 0]
    assert not m.is_playing("shot")


def test_looping_sound_repeats():
    m = Mixer()
    m.add(Sound([100, 200]), m.now(), "loop", loop=True)
    assert m.mix(5) == [100, 200, 100, 200, 100]
    assert m.is_playing("loop")


def test_delayed_start():
    m = Mixer()
    m.add(Sound([300, 300]), m.now() + 2, "late")
    assert m.mix(4) == [0, 0, 300, 300]


def test_mix_clamps_to_int16():
    m = Mixer()
    m.add(Sound([30000]), m.now(), "a")
    m.add(Sound([30000]), m.now(), "b")
    m.add(Sound([-30000, -30000]), m.now() + 1, "c")
    m.add(Sound([-30000, -30000]), m.now() + 1, "d")
    out = m.mix(3)
    assert out[0] == 32767
    assert out[1] == -32768


def test_set_volume_scales_output():
    m = Mixer()
    m.add(Sound([1000]), m.now(), "v")
    m.set_volume("v", 0.5)
    assert m.mix(1) == [500]


def test_stop_silences_channel():
    m = Mixer()
    m.add(Sound([700] * 10), m.now(), "s", loop=True)
    m.stop("s")
    assert m.mix(4) == [0] * 4


def test_channel_limit():
    m = Mixer()
    handles = [m.add(Sound([1] * 10), m.now(), f"h{i}") for i in range(CHANNEL_COUNT)]
    assert handles == [f"h{i}" for i in range(CHANNEL_COUNT)]
    assert m.add(Sound([1]), m.now(), "extra") is None


def test_mixer_player_plays_from_bank():
    m = Mixer()
    player = MixerSoundPlayer([Sound([5, 5]), Sound([9, 9, 9])], m)
    player.play(1, "snd")
    assert player.is_playing("snd")
    assert m.mix(3) == [9, 9, 9]
    assert not player.is_playing("snd")


def test_mixer_player_stop():
    m = Mixer()
    player = MixerSoundPlayer([Sound([4] * 8)], m)
    player.play(0, "x", loops=1)
    player.stop("x")
    assert m.mix(2) == [0, 0]


def test_null_player_never_plays():
    player = NullSoundPlayer()
    player.play(3, "any", 1)
    assert player.is_playing("any") is False
    assert player.stop("any") is None