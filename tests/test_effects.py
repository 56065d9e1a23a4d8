"""Tests for the effect classifier."""

import pytest

from modinfo.effects import Effect, classify_effect


class TestClassifyEffect:

    def test_no_effect(self):
        assert classify_effect(0, 0, 0) is Effect.NONE

    def test_arpeggio(self):
        assert classify_effect(0, 3, 0) is Effect.ARPEGGIO
        assert classify_effect(0, 0, 7) is Effect.ARPEGGIO

    @pytest.mark.parametrize("code, expected", [
        (0x1, Effect.PITCH_SLIDE_UP),
        (0x2, Effect.PITCH_SLIDE_DOWN),
        (0x3, Effect.SLIDE_TO_NOTE),
        (0x4, Effect.VIBRATO),
        (0x5, Effect.SLIDE_TO_NOTE_WITH_VOLUME_SLIDE),
        (0x6, Effect.VIBRATO_WITH_VOLUME_SLIDE),
        (0x9, Effect.INSTRUMENT_OFFSET),
        (0xA, Effect.VOLUME_SLIDE),
        (0xB, Effect.POSITION_JUMP),
        (0xC, Effect.SET_VOLUME),
        (0xD, Effect.PATTERN_BREAK),
    ])
    def test_simple_codes(self, code, expected):
        assert classify_effect(code, 0, 0) is expected
        assert classify_effect(code, 15, 15) is expected

    @pytest.mark.parametrize("code", [0x7, 0x8])
    def test_unused_codes(self, code):
        for x in range(16):
            assert classify_effect(code, x, 15 - x) is Effect.UNKNOWN_EFFECT

    def test_extended_codes(self):
        assert classify_effect(0xE, 5, 0) is Effect.SET_FINE_TUNE
        assert classify_effect(0xE, 10, 3) is Effect.FINE_VOLUME_SLIDE_UP
        assert classify_effect(0xE, 11, 3) is Effect.FINE_VOLUME_SLIDE_DOWN
        assert classify_effect(0xE, 9, 0) is Effect.UNKNOWN_EFFECT
        assert classify_effect(0xE, 0, 0) is Effect.UNKNOWN_EFFECT

    def test_extended_ignores_y(self):
        assert {classify_effect(0xE, 5, y) for y in range(16)} == {Effect.SET_FINE_TUNE}

    def test_change_speed(self):
        assert {classify_effect(0xF, x, y) for x in range(16) for y in range(16)} == {Effect.CHANGE_SPEED}

    def test_out_of_range_code(self):
        assert classify_effect(16, 0, 0) is Effect.UNKNOWN_EFFECT
        assert classify_effect(-1, 1, 1) is Effect.UNKNOWN_EFFECT

    def test_display_names(self):
        assert str(Effect.NONE) == 'None'
        assert str(Effect.SLIDE_TO_NOTE_WITH_VOLUME_SLIDE) == 'SlideToNoteWithVolumeSlide'
        assert str(Effect.UNKNOWN_EFFECT) == 'UnknownEffect'
