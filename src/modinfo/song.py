from dataclasses import dataclass

from modinfo.types import Instrument, Pattern, Row

__all__ = ['Module']


@dataclass(frozen=True)
class Module:
    """
    A module is a collection of patterns played in a specific sequence, possibly with repetitions.
    In addition, modules also store the instruments that are used to play the notes.

    To be consistent with the module standard, all 31 instrument slots and all 128 entries of the
    order list are kept, even when only some of them are in use.
    """

    title: str
    instruments: tuple[Instrument, ...]
    song_length: int  # number of meaningful entries in the order list
    restart: int
    order_list: tuple[int, ...]
    signature: str
    patterns: tuple[Pattern, ...]

    '''
    -------------------------------------
    SONG
    -------------------------------------
    '''

    @property
    def pattern_seq(self) -> tuple[int, ...]:
        """The actual sequence of patterns making up the song."""
        return self.order_list[:self.song_length]

    @property
    def n_patterns(self) -> int:
        return len(self.patterns)

    '''
    -------------------------------------
    PATTERNS
    -------------------------------------
    '''

    def get_pattern(self, pattern_in_song: int) -> Pattern:
        """
        Returns the pattern played at a given position of the song.

        :param pattern_in_song: The position within the song sequence, 0-based.
        :return: The corresponding pattern.
        """

        if pattern_in_song < 0 or pattern_in_song >= len(self.pattern_seq):
            raise IndexError(f"Invalid pattern index {pattern_in_song}")

        return self.patterns[self.pattern_seq[pattern_in_song]]

    def get_row(self, pattern_in_song: int, row: int, channel: int) -> Row:
        return self.get_pattern(pattern_in_song).get_row(row, channel)

    '''
    -------------------------------------
    INSTRUMENTS
    -------------------------------------
    '''

    @property
    def n_actual_samples(self) -> int:
        """The number of non-empty instruments present in the module."""
        return sum(1 for inst in self.instruments if not inst.is_empty())

    def get_instrument(self, instrument_idx: int) -> Instrument:
        """
        Returns an instrument by the number used to reference it from pattern cells.

        :param instrument_idx: The instrument number, 1 to 31.
        :return: The instrument.
        """

        if instrument_idx <= 0 or instrument_idx > len(self.instruments):
            raise IndexError(f"Invalid instrument index {instrument_idx}")

        return self.instruments[instrument_idx - 1]
