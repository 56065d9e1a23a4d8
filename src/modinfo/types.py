"""
Data types for decoded MOD modules.

This module contains the value classes produced by the decoder:
- Row, Channel, Pattern: musical content
- Instrument: sample descriptor plus its raw 8-bit payload

All of them are frozen: a decoded module is never modified after it has been built.
"""

import array
from dataclasses import dataclass

from modinfo.effects import Effect

__all__ = ['PERIOD_TABLE', 'Row', 'Channel', 'Pattern', 'Instrument']


# OpenMPT period table for Tuning 0, Normal
PERIOD_TABLE = {
    3424: 'C-2', 3232: 'C#2', 3048: 'D-2', 2880: 'D#2', 2712: 'E-2', 2560: 'F-2', 2416: 'F#2', 2280: 'G-2',
    2152: 'G#2', 2032: 'A-2', 1920: 'A#2', 1812: 'B-2',
    1712: 'C-3', 1616: 'C#3', 1524: 'D-3', 1440: 'D#3', 1356: 'E-3', 1280: 'F-3', 1208: 'F#3', 1140: 'G-3',
    1076: 'G#3', 1016: 'A-3', 960: 'A#3', 906: 'B-3',
    856: 'C-4', 808: 'C#4', 762: 'D-4', 720: 'D#4', 678: 'E-4', 640: 'F-4', 604: 'F#4', 570: 'G-4', 538: 'G#4',
    508: 'A-4', 480: 'A#4', 453: 'B-4',
    428: 'C-5', 404: 'C#5', 381: 'D-5', 360: 'D#5', 339: 'E-5', 320: 'F-5', 302: 'F#5', 285: 'G-5', 269: 'G#5',
    254: 'A-5', 240: 'A#5', 226: 'B-5',
    214: 'C-6', 202: 'C#6', 190: 'D-6', 180: 'D#6', 170: 'E-6', 160: 'F-6', 151: 'F#6', 143: 'G-6', 135: 'G#6',
    127: 'A-6', 120: 'A#6', 113: 'B-6',
    107: 'C-7', 101: 'C#7', 95: 'D-7', 90: 'D#7', 85: 'E-7', 80: 'F-7', 75: 'F#7', 71: 'G-7', 67: 'G#7', 63: 'A-7',
    60: 'A#7', 56: 'B-7',
    53: 'C-8', 50: 'C#8', 47: 'D-8', 45: 'D#8', 42: 'E-8', 40: 'F-8', 37: 'F#8', 35: 'G-8', 33: 'G#8', 31: 'A-8',
    30: 'A#8', 28: 'B-8'
}


@dataclass(frozen=True)
class Row:
    """
    One channel's event at one row of a pattern (a "cell").
    The effect category is stored together with the raw code and nibbles it was classified from,
    since some categories (e.g. arpeggio, volume slides) depend on the nibble values.
    """

    instrument_idx: int = 0  # 0 means no instrument
    pitch: int = 0  # 12-bit period, 0 means no note
    effect: Effect = Effect.NONE
    effect_code: int = 0
    x: int = 0
    y: int = 0

    @property
    def note_name(self) -> str:
        """The note name for the period, e.g. 'C-4', or '' if there is no note or the period is non-standard."""
        return PERIOD_TABLE.get(self.pitch, '')

    @property
    def effect_string(self) -> str:
        """The effect in tracker notation, e.g. 'A0F', or '' when there is no effect."""
        if self.effect_code == 0 and self.x == 0 and self.y == 0:
            return ''
        return f"{self.effect_code:X}{self.x:X}{self.y:X}"

    def __str__(self):
        s = ''
        if self.pitch == 0:
            s += '--- '
        elif self.note_name == '':
            s += f"{self.pitch:03X} "  # non-standard period, show it raw
        else:
            s += self.note_name + ' '
        if self.instrument_idx == 0:
            s += '-- '
        else:
            s += f"{self.instrument_idx:02d} "
        if self.effect_string == '':
            s += '---'
        else:
            s += self.effect_string
        return s

    def is_empty(self) -> bool:
        return self.instrument_idx == 0 and self.pitch == 0 and self.effect_string == ''


@dataclass(frozen=True)
class Channel:
    """One of the four tracks of a pattern, one row per song row."""

    N_ROWS = 64

    rows: tuple[Row, ...]

    def __post_init__(self):
        if len(self.rows) != Channel.N_ROWS:
            raise ValueError(f"A channel must have {Channel.N_ROWS} rows, got {len(self.rows)}.")

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, row: int) -> Row:
        return self.rows[row]


@dataclass(frozen=True)
class Pattern:
    """
    A pattern is a page of notes, and is part of a song.
    It is made of four channels of 64 rows each; use it as channels[channel][row].
    """

    N_CHANNELS = 4

    channels: tuple[Channel, ...]

    def __post_init__(self):
        if len(self.channels) != Pattern.N_CHANNELS:
            raise ValueError(f"A pattern must have {Pattern.N_CHANNELS} channels, got {len(self.channels)}.")

    @property
    def n_rows(self) -> int:
        return Channel.N_ROWS

    @property
    def n_channels(self) -> int:
        return len(self.channels)

    def __len__(self) -> int:
        return self.n_rows

    def get_row(self, row: int, channel: int) -> Row:
        """
        Returns the cell at the given row and channel, both 0-based.
        """

        if row < 0 or row >= self.n_rows:
            raise IndexError(f"Invalid row index {row}")

        if channel < 0 or channel >= self.n_channels:
            raise IndexError(f"Invalid channel index {channel}")

        return self.channels[channel].rows[row]

    def is_empty(self) -> bool:
        return all(r.is_empty() for c in self.channels for r in c.rows)


@dataclass(frozen=True)
class Instrument:
    """
    An instrument is a digitized soundwave plus some additional attributes.
    In MOD files instruments and samples are synonymous: notes reference them directly.

    Lengths and repeat points are expressed in 16-bit words, as stored in the file.
    """

    name: str = ''
    length: int = 0  # in words
    finetune: int = 0  # signed, -8 to 7
    volume: int = 64  # raw byte, nominally 0x00-0x40
    repeat_point: int = 0  # in words
    repeat_len: int = 0  # in words
    payload: bytes = b''

    @property
    def byte_length(self) -> int:
        return 2 * self.length

    @property
    def waveform(self) -> array.array:
        """The payload reinterpreted as signed 8-bit values."""
        return array.array('b', self.payload)

    def is_empty(self) -> bool:
        return len(self.payload) == 0
