"""
Effect categories for MOD pattern cells.

Every cell stores an effect code (one hex digit) plus two argument nibbles, e.g. "A0F" is
effect A (volume slide) with arguments x=0, y=F. This module maps the raw triple to a semantic
category; the raw nibbles are always kept alongside the category in the Row.
"""

from enum import Enum

__all__ = ['Effect', 'classify_effect']


class Effect(Enum):
    """Closed set of effect categories, with the display name used in reports."""

    NONE = 'None'
    ARPEGGIO = 'Arpeggio'
    PITCH_SLIDE_UP = 'PitchSlideUp'
    PITCH_SLIDE_DOWN = 'PitchSlideDown'
    SLIDE_TO_NOTE = 'SlideToNote'
    VIBRATO = 'Vibrato'
    SLIDE_TO_NOTE_WITH_VOLUME_SLIDE = 'SlideToNoteWithVolumeSlide'
    VIBRATO_WITH_VOLUME_SLIDE = 'VibratoWithVolumeSlide'
    VOLUME_SLIDE = 'VolumeSlide'
    INSTRUMENT_OFFSET = 'InstrumentOffset'
    SET_VOLUME = 'SetVolume'
    PATTERN_BREAK = 'PatternBreak'
    FINE_VOLUME_SLIDE_UP = 'FineVolumeSlideUp'
    FINE_VOLUME_SLIDE_DOWN = 'FineVolumeSlideDown'
    CHANGE_SPEED = 'ChangeSpeed'
    SET_FINE_TUNE = 'SetFineTune'
    POSITION_JUMP = 'PositionJump'
    UNKNOWN_EFFECT = 'UnknownEffect'

    def __str__(self):
        return self.value


# codes 7 and 8 are not used by this format revision
_SIMPLE_EFFECTS = {
    0x1: Effect.PITCH_SLIDE_UP,
    0x2: Effect.PITCH_SLIDE_DOWN,
    0x3: Effect.SLIDE_TO_NOTE,
    0x4: Effect.VIBRATO,
    0x5: Effect.SLIDE_TO_NOTE_WITH_VOLUME_SLIDE,
    0x6: Effect.VIBRATO_WITH_VOLUME_SLIDE,
    0x9: Effect.INSTRUMENT_OFFSET,
    0xA: Effect.VOLUME_SLIDE,
    0xB: Effect.POSITION_JUMP,
    0xC: Effect.SET_VOLUME,
    0xD: Effect.PATTERN_BREAK,
    0xF: Effect.CHANGE_SPEED,
}

# E-commands are selected by the x nibble
_EXTENDED_EFFECTS = {
    0x5: Effect.SET_FINE_TUNE,
    0xA: Effect.FINE_VOLUME_SLIDE_UP,
    0xB: Effect.FINE_VOLUME_SLIDE_DOWN,
}


def classify_effect(code: int, x: int, y: int) -> Effect:
    """
    Returns the effect category for a raw effect code and its two argument nibbles.
    Never fails: anything outside the known table is UNKNOWN_EFFECT.

    :param code: The effect code, 0 to 15.
    :param x: The first argument nibble, 0 to 15.
    :param y: The second argument nibble, 0 to 15.
    :return: The Effect category.
    """

    if code == 0x0:
        if x == 0 and y == 0:
            return Effect.NONE
        return Effect.ARPEGGIO

    if code == 0xE:
        return _EXTENDED_EFFECTS.get(x, Effect.UNKNOWN_EFFECT)

    return _SIMPLE_EFFECTS.get(code, Effect.UNKNOWN_EFFECT)
